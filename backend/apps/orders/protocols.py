from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Protocol

from apps.catalog.models import Template
from apps.coupons.models import Coupon

from .models import Order, OrderItem


class OrderRepositoryProtocol(Protocol):
    def create(self, **data) -> Order:
        ...

    def update(self, order: Order, **data) -> Order:
        ...

    def for_user(self, user_id) -> Iterable[Order]:
        ...

    def get_for_user(self, order_id, user_id, *, for_update: bool = False) -> Optional[Order]:
        ...


class OrderItemRepositoryProtocol(Protocol):
    def create(self, **data) -> OrderItem:
        ...


class TemplateRepositoryProtocol(Protocol):
    def get_active(self, template_id) -> Optional[Template]:
        ...

    def increment_downloads(self, template_ids: Iterable) -> int:
        ...


class CouponGatewayProtocol(Protocol):
    def find_usable(self, code: str, order_total: Decimal, user_id=None) -> Coupon:
        ...

    def record_usage(self, coupon: Coupon, *, user_id, order_id, discount_amount: Decimal):
        ...
