from __future__ import annotations

from typing import Optional

from apps.users.container import build_user_service
from apps.users.services import UserService
from .credentials import CredentialHelper
from .services import AuthService


def build_auth_service(
    users: Optional[UserService] = None,
    credentials: Optional[CredentialHelper] = None,
) -> AuthService:
    return AuthService(
        users=users or build_user_service(),
        credentials=credentials or CredentialHelper(),
    )
