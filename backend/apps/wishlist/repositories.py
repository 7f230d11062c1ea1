import uuid
from typing import List, Optional

from apps.common.repository import GenericRepository
from .models import Wishlist


def _as_uuid(value) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class WishlistRepository(GenericRepository[Wishlist]):
    def __init__(self):
        super().__init__(Wishlist)

    def find(self, user_id, template_id) -> Optional[Wishlist]:
        pk = _as_uuid(template_id)
        if pk is None:
            return None
        return self.model.objects.filter(user_id=user_id, template_id=pk).first()

    def template_ids_for_user(self, user_id) -> List[str]:
        ids = self.model.objects.filter(user_id=user_id).values_list("template_id", flat=True)
        return [str(pk) for pk in ids]

    def active_entries_for_user(self, user_id):
        return (
            self.model.objects.filter(user_id=user_id, template__is_active=True)
            .select_related("template")
            .order_by("-created_at")
        )

    def clear_for_user(self, user_id) -> int:
        return self.delete_where(user_id=user_id)
