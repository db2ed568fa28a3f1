from typing import Optional

from apps.common.repository import GenericRepository
from .models import User


class UserRepository(GenericRepository[User]):
    ordering = ("-id",)

    def __init__(self):
        super().__init__(User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.get(email=email)

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        qs = self.model.objects.filter(email=email)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return qs.exists()
