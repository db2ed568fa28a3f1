from dataclasses import dataclass
from typing import Optional
from .models import User


@dataclass
class UserDTO:
    id: int
    name: str
    email: str
    age: Optional[int]
    created_at: Optional[str]
    updated_at: Optional[str]


def format_timestamp(value) -> Optional[str]:
    if value is None:
        return None
    try:
        return value.isoformat()
    except AttributeError:
        return str(value)


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        name=u.name,
        email=u.email,
        age=u.age,
        created_at=format_timestamp(getattr(u, "created_at", None)),
        updated_at=format_timestamp(getattr(u, "updated_at", None)),
    )
