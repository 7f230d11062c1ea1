from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass
class OrderItemDTO:
    template_id: Optional[str]
    template_name: str
    template_type: str
    price: Decimal


@dataclass
class OrderDTO:
    id: str
    order_number: str
    status: str
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    coupon_code: Optional[str]
    payment_method: str
    payment_id: str
    paid_at: Optional[datetime]
    created_at: datetime
    items: List[OrderItemDTO] = field(default_factory=list)
