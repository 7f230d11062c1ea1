from typing import Iterable, List

from .dtos import OrderDTO, OrderItemDTO
from .models import Order, OrderItem


class OrderMapper:
    @staticmethod
    def item_to_dto(item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            template_id=str(item.template_id) if item.template_id else None,
            template_name=item.template_name,
            template_type=item.template_type,
            price=item.price,
        )

    @staticmethod
    def to_dto(order: Order) -> OrderDTO:
        coupon = order.coupon if order.coupon_id else None
        return OrderDTO(
            id=str(order.id),
            order_number=order.order_number,
            status=order.status,
            subtotal=order.subtotal,
            discount=order.discount,
            total=order.total,
            coupon_code=coupon.code if coupon is not None else None,
            payment_method=order.payment_method,
            payment_id=order.payment_id,
            paid_at=order.paid_at,
            created_at=order.created_at,
            items=[OrderMapper.item_to_dto(i) for i in order.items.all()],
        )

    @staticmethod
    def many_to_dto(orders: Iterable[Order]) -> List[OrderDTO]:
        return [OrderMapper.to_dto(o) for o in orders]
