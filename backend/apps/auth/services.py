from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.db import IntegrityError

from apps.common import get_logger
from apps.users.dtos import UserDTO
from apps.users.services import UserService
from .credentials import CredentialHelper

logger = get_logger(__name__).bind(component="auth", service="AuthService")

ErrorResult = Tuple[str, str, Optional[Any]]

EMAIL_TAKEN = "User with this email already exists"
INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(self, users: UserService, credentials: CredentialHelper):
        self.users = users
        self.credentials = credentials
        self.logger = logger

    def _session(self, user: UserDTO) -> Dict[str, Any]:
        return {
            "user": user,
            "token": self.credentials.issue_token(user.id, user.email),
        }

    def register(
        self,
        name: str,
        email: str,
        password: str,
        age: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ErrorResult]]:
        self.logger.debug("Received registration request", email=email)
        if self.users.get_user_by_email(email):
            self.logger.info("Registration rejected: email already exists", email=email)
            return None, ("CONFLICT", EMAIL_TAKEN, None)
        password_hash = self.credentials.hash_password(password)
        try:
            user = self.users.create_user(
                name, email, age=age, password_hash=password_hash
            )
        except IntegrityError:
            self.logger.warning(
                "Registration rejected by unique constraint", email=email
            )
            return None, ("CONFLICT", EMAIL_TAKEN, None)
        self.logger.info("User registered successfully", user_id=user.id)
        return self._session(user), None

    def login(
        self, email: str, password: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ErrorResult]]:
        found = self.users.get_credentials(email)
        # Same answer for unknown email and wrong password.
        if not found:
            self.logger.info("Login rejected: unknown email", email=email)
            return None, ("UNAUTHORIZED", INVALID_CREDENTIALS, None)
        user, password_hash = found
        if not self.credentials.verify_password(password, password_hash):
            self.logger.info("Login rejected: password mismatch", user_id=user.id)
            return None, ("UNAUTHORIZED", INVALID_CREDENTIALS, None)
        self.logger.info("User logged in", user_id=user.id)
        return self._session(user), None

    def get_profile(self, user_id: int) -> Optional[UserDTO]:
        profile = self.users.get_user_by_id(user_id)
        if not profile:
            self.logger.warning("Profile requested for missing user", user_id=user_id)
        return profile
