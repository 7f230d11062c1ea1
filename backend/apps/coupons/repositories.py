import uuid
from typing import Optional

from django.db.models import F

from apps.common.repository import GenericRepository
from .models import Coupon, CouponUsage


class CouponRepository(GenericRepository[Coupon]):
    def __init__(self):
        super().__init__(Coupon)

    def get(self, **filters) -> Optional[Coupon]:
        pk = filters.get("id")
        if pk is not None:
            try:
                filters["id"] = uuid.UUID(str(pk))
            except (TypeError, ValueError):
                return None
        return super().get(**filters)

    def get_by_code(self, code: str) -> Optional[Coupon]:
        return self.model.objects.filter(code=code).first()

    def list_recent(self, active_only: bool = False):
        qs = self.model.objects.order_by("-created_at")
        if active_only:
            qs = qs.filter(is_active=True)
        return qs

    def increment_usage(self, coupon: Coupon) -> None:
        self.model.objects.filter(pk=coupon.pk).update(used_count=F("used_count") + 1)
        coupon.refresh_from_db(fields=["used_count"])


class CouponUsageRepository(GenericRepository[CouponUsage]):
    def __init__(self):
        super().__init__(CouponUsage)

    def count_for_user(self, coupon_id, user_id) -> int:
        return self.model.objects.filter(coupon_id=coupon_id, user_id=user_id).count()
