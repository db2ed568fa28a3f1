from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from django.db import transaction

from apps.common import get_logger
from apps.users.services import UserService
from .dtos import AddressDTO, address_to_dto
from .protocols import AddressRepositoryProtocol

logger = get_logger(__name__).bind(component="addresses", layer="service")

UPDATABLE_FIELDS = ("street", "city", "zip_code", "country")

ErrorResult = Tuple[str, str, Optional[Any]]


class AddressService:
    def __init__(self, addresses: AddressRepositoryProtocol, users: UserService):
        self.addresses = addresses
        self.users = users
        self.logger = logger.bind(service="AddressService")

    def get_all_addresses(self) -> List[AddressDTO]:
        self.logger.debug("Listing addresses")
        return [address_to_dto(a) for a in self.addresses.list()]

    def get_address_by_id(self, address_id: int) -> Optional[AddressDTO]:
        self.logger.debug("Fetching address", address_id=address_id)
        addr = self.addresses.get(id=address_id)
        if not addr:
            self.logger.info("Address not found", address_id=address_id)
            return None
        return address_to_dto(addr)

    def get_addresses_by_user_id(self, user_id: int) -> List[AddressDTO]:
        self.logger.debug("Listing user addresses", user_id=user_id)
        return [address_to_dto(a) for a in self.addresses.list(user_id=user_id)]

    def create_address(
        self,
        street: str,
        city: str,
        zip_code: str,
        country: str,
        user_id: int,
    ) -> Tuple[Optional[AddressDTO], Optional[ErrorResult]]:
        self.logger.info("Creating address", user_id=user_id)
        if not self.users.user_exists(user_id):
            self.logger.warning(
                "Address creation failed: user not found", user_id=user_id
            )
            return None, ("REFERENCE_ERROR", "User not found", None)
        with transaction.atomic():
            addr = self.addresses.create(
                user_id=user_id,
                street=street,
                city=city,
                zip_code=zip_code,
                country=country,
            )
        self.logger.info("Address created", user_id=user_id, address_id=addr.id)
        return address_to_dto(addr, with_owner=False), None

    def update_address(
        self, address_id: int, data: Mapping[str, Any]
    ) -> Optional[AddressDTO]:
        self.logger.info("Updating address", address_id=address_id)
        addr = self.addresses.get(id=address_id)
        if not addr:
            self.logger.warning(
                "Address update failed: address not found", address_id=address_id
            )
            return None
        # userId is fixed at creation; only the location fields change.
        changes = {key: data[key] for key in UPDATABLE_FIELDS if key in data}
        with transaction.atomic():
            addr = self.addresses.update(addr, **changes)
        self.logger.info(
            "Address updated", address_id=address_id, fields=sorted(changes)
        )
        return address_to_dto(addr, with_owner=False)

    def delete_address(self, address_id: int) -> bool:
        self.logger.info("Deleting address", address_id=address_id)
        addr = self.addresses.get(id=address_id)
        if not addr:
            self.logger.warning(
                "Address deletion failed: address not found", address_id=address_id
            )
            return False
        with transaction.atomic():
            self.addresses.delete(addr)
        self.logger.info("Address deleted", address_id=address_id)
        return True
