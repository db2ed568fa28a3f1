from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from django.db import transaction

from apps.common import get_logger
from .dtos import UserDTO, user_to_dto
from .protocols import UserRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")

UPDATABLE_FIELDS = ("name", "email", "age")


class UserService:
    """
    Persistence-facing operations for users.

    Email uniqueness is not enforced here: callers look the address up with
    `is_email_taken` first, and the unique constraint on the table is the
    final guard (an `IntegrityError` propagates to the caller).
    """

    def __init__(self, users: UserRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="UserService")

    def get_all_users(self) -> List[UserDTO]:
        self.logger.debug("Listing users")
        return [user_to_dto(u) for u in self.users.list()]

    def get_user_by_id(self, user_id: int) -> Optional[UserDTO]:
        self.logger.debug("Fetching user", user_id=user_id)
        u = self.users.get(id=user_id)
        if not u:
            self.logger.info("User not found", user_id=user_id)
        return user_to_dto(u) if u else None

    def get_user_by_email(self, email: str) -> Optional[UserDTO]:
        self.logger.debug("Fetching user by email", email=email)
        u = self.users.get_by_email(email)
        return user_to_dto(u) if u else None

    def get_credentials(self, email: str) -> Optional[Tuple[UserDTO, str]]:
        """Return the public view together with the stored password hash."""
        u = self.users.get_by_email(email)
        if not u:
            return None
        return user_to_dto(u), u.password

    def user_exists(self, user_id: int) -> bool:
        return self.users.exists(id=user_id)

    def is_email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        taken = self.users.email_exists(email, exclude_id=exclude_id)
        if taken:
            self.logger.info(
                "Email already registered", email=email, exclude_id=exclude_id
            )
        return taken

    def create_user(
        self,
        name: str,
        email: str,
        age: Optional[int] = None,
        password_hash: Optional[str] = None,
    ) -> UserDTO:
        self.logger.info("Creating user", email=email)
        data: Dict[str, Any] = {"name": name, "email": email, "age": age}
        if password_hash:
            data["password"] = password_hash
        with transaction.atomic():
            user = self.users.create(**data)
        self.logger.info("User created", user_id=user.id)
        return user_to_dto(user)

    def update_user(self, user_id: int, data: Mapping[str, Any]) -> Optional[UserDTO]:
        self.logger.info("Updating user", user_id=user_id)
        user = self.users.get(id=user_id)
        if not user:
            self.logger.warning("User update failed: not found", user_id=user_id)
            return None
        changes = {key: data[key] for key in UPDATABLE_FIELDS if key in data}
        with transaction.atomic():
            user = self.users.update(user, **changes)
        self.logger.info("User updated", user_id=user_id, fields=sorted(changes))
        return user_to_dto(user)

    def delete_user(self, user_id: int) -> bool:
        self.logger.info("Deleting user", user_id=user_id)
        user = self.users.get(id=user_id)
        if not user:
            self.logger.warning("User deletion failed: not found", user_id=user_id)
            return False
        # Owned addresses go with the user (FK cascade) in the same transaction.
        with transaction.atomic():
            self.users.delete(user)
        self.logger.info("User deleted", user_id=user_id)
        return True
