from __future__ import annotations

from typing import Optional

from apps.users.container import build_user_service
from apps.users.services import UserService
from .repositories import AddressRepository
from .services import AddressService


def build_address_service(users: Optional[UserService] = None) -> AddressService:
    return AddressService(
        addresses=AddressRepository(),
        users=users or build_user_service(),
    )
