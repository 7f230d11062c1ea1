from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Callable, List, Optional, Type, Union

from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.pagination import PageNumberPagination

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from apps.common.i18n import Messages

from .commands import OrderCreateCommand
from .dtos import OrderDTO
from .mappers import OrderMapper
from .models import Order, OrderStatus
from .protocols import (
    CouponGatewayProtocol,
    OrderItemRepositoryProtocol,
    OrderRepositoryProtocol,
    TemplateRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")

SIMULATED_PAYMENT_METHOD = "simulated"


def generate_payment_id() -> str:
    return f"PAY-{uuid.uuid4().hex[:16].upper()}"


class OrderService:
    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        items: OrderItemRepositoryProtocol,
        templates: TemplateRepositoryProtocol,
        coupons: CouponGatewayProtocol,
        on_downloads_changed: Optional[Callable[[], None]] = None,
    ):
        self.orders = orders
        self.items = items
        self.templates = templates
        self.coupons = coupons
        self.on_downloads_changed = on_downloads_changed
        self.logger = logger.bind(service="OrderService")

    def _not_found(self, order_id) -> ApplicationError:
        return ApplicationError(
            "NOT_FOUND",
            Messages.ORDER_NOT_FOUND,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"id": str(order_id)},
        )

    def create_order(self, user_id, data: Union[dict, OrderCreateCommand]) -> OrderDTO:
        """
        Price the requested templates server-side, apply an optional coupon
        and persist a ``pending`` order with its items in one transaction.
        """
        cmd = data if isinstance(data, OrderCreateCommand) else OrderCreateCommand.from_raw(data)
        if not cmd.template_ids:
            raise ApplicationError(
                "VALIDATION_ERROR",
                Messages.ORDER_ITEMS_REQUIRED,
                details={"items": [Messages.ORDER_ITEMS_REQUIRED]},
            )
        templates = []
        for template_id in cmd.template_ids:
            template = self.templates.get_active(template_id)
            if template is None:
                self.logger.info(
                    "Order rejected: template unavailable",
                    user_id=user_id,
                    template_id=template_id,
                )
                raise ApplicationError(
                    "VALIDATION_ERROR",
                    Messages.TEMPLATE_UNAVAILABLE,
                    details={"template_id": template_id},
                )
            templates.append(template)

        subtotal = sum((t.effective_price for t in templates), Decimal("0.00"))
        coupon = None
        discount = Decimal("0.00")
        if cmd.coupon_code:
            coupon = self.coupons.find_usable(cmd.coupon_code, subtotal, user_id)
            discount = coupon.calculate_discount(subtotal)
        total = max(subtotal - discount, Decimal("0.00"))

        with transaction.atomic():
            order: Order = self.orders.create(
                user_id=user_id,
                subtotal=subtotal,
                discount=discount,
                total=total,
                status=OrderStatus.PENDING,
                coupon=coupon,
            )
            for template in templates:
                self.items.create(
                    order=order,
                    template=template,
                    price=template.effective_price,
                    template_name=template.name_ar,
                    template_type=template.type,
                )
        self.logger.info(
            "Order created",
            order_number=order.order_number,
            user_id=user_id,
            total=str(total),
            items_count=len(templates),
            coupon=coupon.code if coupon else None,
        )
        return OrderMapper.to_dto(order)

    def pay_order(self, user_id, order_id, *, payment_method: str = SIMULATED_PAYMENT_METHOD) -> OrderDTO:
        """
        Settle a pending order with a simulated payment: mark it completed,
        record coupon usage and count one download per purchased template.
        """
        with transaction.atomic():
            order = self.orders.get_for_user(order_id, user_id, for_update=True)
            if order is None:
                self.logger.info("Payment rejected: order not found", order_id=str(order_id), user_id=user_id)
                raise self._not_found(order_id)
            if order.status != OrderStatus.PENDING:
                self.logger.info(
                    "Payment rejected: order not pending",
                    order_id=str(order_id),
                    status=order.status,
                )
                raise ApplicationError(
                    "CONFLICT",
                    Messages.ORDER_NOT_PENDING,
                    status_code=status.HTTP_409_CONFLICT,
                    details={"status": order.status},
                )
            self.orders.update(
                order,
                status=OrderStatus.COMPLETED,
                payment_method=payment_method or SIMULATED_PAYMENT_METHOD,
                payment_id=generate_payment_id(),
                paid_at=timezone.now(),
            )
            if order.coupon_id:
                self.coupons.record_usage(
                    order.coupon,
                    user_id=user_id,
                    order_id=order.id,
                    discount_amount=order.discount,
                )
            template_ids = [i.template_id for i in order.items.all() if i.template_id]
            self.templates.increment_downloads(template_ids)
        if self.on_downloads_changed is not None:
            self.on_downloads_changed()
        self.logger.info(
            "Payment completed",
            order_number=order.order_number,
            payment_id=order.payment_id,
            payment_method=order.payment_method,
        )
        return self.get_order(user_id, order_id)

    def get_order(self, user_id, order_id) -> OrderDTO:
        order = self.orders.get_for_user(order_id, user_id)
        if order is None:
            raise self._not_found(order_id)
        return OrderMapper.to_dto(order)

    def list_orders(self, user_id) -> List[OrderDTO]:
        return OrderMapper.many_to_dto(self.orders.for_user(user_id))

    def list_orders_paginated(
        self,
        request,
        user_id,
        *,
        paginator_class: Type[PageNumberPagination],
        serializer_class,
        view=None,
    ):
        self.logger.debug("Listing orders", user_id=user_id)
        queryset = self.orders.for_user(user_id)
        paginator = paginator_class()
        page = paginator.paginate_queryset(queryset, request, view=view)
        serializer = serializer_class(OrderMapper.many_to_dto(page), many=True)
        return paginator.get_paginated_response(serializer.data)
