from apps.common.repository import GenericRepository
from .models import Address


class AddressRepository(GenericRepository[Address]):
    related = ("user",)
    ordering = ("id",)

    def __init__(self):
        super().__init__(Address)
