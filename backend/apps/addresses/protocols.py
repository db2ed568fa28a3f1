from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.addresses.models import Address


class AddressRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["Address"]: ...

    def get(self, **filters) -> Optional["Address"]: ...

    def create(self, **data) -> "Address": ...

    def update(self, address: "Address", **data) -> "Address": ...

    def delete(self, address: "Address") -> None: ...
