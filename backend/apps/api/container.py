from __future__ import annotations

from dataclasses import dataclass

from apps.addresses.container import build_address_service
from apps.addresses.services import AddressService
from apps.auth.container import build_auth_service
from apps.auth.services import AuthService
from apps.users.container import build_user_service
from apps.users.services import UserService


@dataclass(frozen=True)
class ServiceContainer:
    users: UserService
    addresses: AddressService
    auth: AuthService


def build_container() -> ServiceContainer:
    """Wire repositories and services once; views receive them via `as_view`."""
    users = build_user_service()
    return ServiceContainer(
        users=users,
        addresses=build_address_service(users=users),
        auth=build_auth_service(users=users),
    )
