from __future__ import annotations

from datetime import timedelta
from typing import Optional, Type, Union

from django.contrib.auth.hashers import check_password, make_password
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from apps.common import get_logger

logger = get_logger(__name__).bind(component="auth", layer="credentials")


class CredentialHelper:
    """
    Password hashing and bearer token signing/verification.

    Hashes use Django's configured hasher (salted PBKDF2 by default). Tokens
    are simplejwt access tokens carrying the user's `id` and `email` claims
    and expire after `SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]`.
    """

    token_class: Type[AccessToken] = AccessToken

    def hash_password(self, raw_password: str) -> str:
        return make_password(raw_password)

    def verify_password(self, raw_password: str, encoded: Optional[str]) -> bool:
        if not encoded:
            # Users created without credentials can never log in.
            return False
        return check_password(raw_password, encoded)

    def issue_token(
        self, user_id: int, email: str, *, lifetime: Optional[timedelta] = None
    ) -> str:
        token = self.token_class()
        if lifetime is not None:
            token.set_exp(lifetime=lifetime)
        token[api_settings.USER_ID_CLAIM] = user_id
        token["email"] = email
        return str(token)

    def verify_token(self, raw_token: Union[str, bytes]) -> Optional[TokenUser]:
        """Return the token identity, or None when the token is invalid or expired."""
        if isinstance(raw_token, bytes):
            raw_token = raw_token.decode("utf-8", errors="replace")
        try:
            token = self.token_class(raw_token)
        except TokenError as exc:
            logger.info("Bearer token rejected", error=str(exc))
            return None
        if token.get(api_settings.USER_ID_CLAIM) is None:
            logger.info("Bearer token rejected: missing identity claim")
            return None
        return TokenUser(token)
