from dataclasses import dataclass
from typing import Optional

from apps.users.dtos import UserDTO, user_to_dto, format_timestamp
from .models import Address


@dataclass
class AddressDTO:
    id: int
    street: str
    city: str
    zip_code: str
    country: str
    user_id: int
    created_at: Optional[str]
    updated_at: Optional[str]
    user: Optional[UserDTO] = None


def address_to_dto(a: Address, *, with_owner: bool = True) -> AddressDTO:
    owner = user_to_dto(a.user) if with_owner else None
    return AddressDTO(
        id=a.id,
        street=a.street,
        city=a.city,
        zip_code=a.zip_code,
        country=a.country,
        user_id=a.user_id,
        created_at=format_timestamp(getattr(a, "created_at", None)),
        updated_at=format_timestamp(getattr(a, "updated_at", None)),
        user=owner,
    )
