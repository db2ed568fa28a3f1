from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.users.models import User


class UserRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["User"]: ...

    def get(self, **filters) -> Optional["User"]: ...

    def get_by_email(self, email: str) -> Optional["User"]: ...

    def exists(self, **filters) -> bool: ...

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool: ...

    def create(self, **data) -> "User": ...

    def update(self, user: "User", **data) -> "User": ...

    def delete(self, user: "User") -> None: ...
