from __future__ import annotations

from apps.catalog.container import build_template_service
from apps.catalog.repositories import TemplateRepository
from apps.coupons.container import build_coupon_service

from .repositories import OrderItemRepository, OrderRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(
        orders=OrderRepository(),
        items=OrderItemRepository(),
        templates=TemplateRepository(),
        coupons=build_coupon_service(),
        on_downloads_changed=build_template_service().invalidate_list_cache,
    )
