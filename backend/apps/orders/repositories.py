import uuid
from typing import Optional

from apps.common.repository import GenericRepository
from .models import Order, OrderItem


class OrderRepository(GenericRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def _base_queryset(self):
        return (
            self.model.objects.select_related("coupon")
            .prefetch_related("items")
            .order_by("-created_at")
        )

    def for_user(self, user_id):
        return self._base_queryset().filter(user_id=user_id)

    def get_for_user(self, order_id, user_id, *, for_update: bool = False) -> Optional[Order]:
        try:
            pk = uuid.UUID(str(order_id))
        except (TypeError, ValueError, AttributeError):
            return None
        if for_update:
            return self.model.objects.select_for_update().filter(id=pk, user_id=user_id).first()
        return self._base_queryset().filter(id=pk, user_id=user_id).first()


class OrderItemRepository(GenericRepository[OrderItem]):
    def __init__(self):
        super().__init__(OrderItem)
