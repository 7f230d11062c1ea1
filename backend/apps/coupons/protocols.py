from __future__ import annotations

from typing import Iterable, Optional, Protocol

from .models import Coupon, CouponUsage


class CouponRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Coupon]:
        ...

    def get_by_code(self, code: str) -> Optional[Coupon]:
        ...

    def list_recent(self, active_only: bool = False) -> Iterable[Coupon]:
        ...

    def exists(self, **filters) -> bool:
        ...

    def create(self, **data) -> Coupon:
        ...

    def update(self, coupon: Coupon, **data) -> Coupon:
        ...

    def delete(self, coupon: Coupon) -> None:
        ...

    def increment_usage(self, coupon: Coupon) -> None:
        ...


class CouponUsageRepositoryProtocol(Protocol):
    def count_for_user(self, coupon_id, user_id) -> int:
        ...

    def create(self, **data) -> CouponUsage:
        ...
