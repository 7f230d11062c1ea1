from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass
class CouponDTO:
    id: str
    code: str
    description_ar: Optional[str]
    description_en: Optional[str]
    discount_type: str
    discount_value: Decimal
    formatted_discount: str
    max_discount: Optional[Decimal]
    min_order_amount: Decimal
    max_uses: Optional[int]
    used_count: int
    max_uses_per_user: Optional[int]
    starts_at: Optional[datetime]
    expires_at: Optional[datetime]
    is_active: bool


@dataclass
class CouponValidationDTO:
    valid: bool
    coupon: Dict[str, Any]
    calculated_discount: Decimal
    new_total: Decimal
