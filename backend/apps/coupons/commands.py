from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

_WRITABLE = (
    "code",
    "description_ar",
    "description_en",
    "discount_type",
    "discount_value",
    "max_discount",
    "min_order_amount",
    "max_uses",
    "max_uses_per_user",
    "starts_at",
    "expires_at",
    "is_active",
)


def normalize_code(raw: Any) -> str:
    return str(raw or "").strip().upper()


@dataclass
class CouponCreateCommand:
    code: str
    discount_type: str
    discount_value: Decimal
    description_ar: Optional[str] = None
    description_en: Optional[str] = None
    max_discount: Optional[Decimal] = None
    min_order_amount: Decimal = Decimal("0")
    max_uses: Optional[int] = None
    max_uses_per_user: Optional[int] = None
    starts_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    is_active: bool = True

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "CouponCreateCommand":
        data = {k: v for k, v in dict(payload or {}).items() if k in _WRITABLE}
        data["code"] = normalize_code(data.get("code"))
        if data.get("min_order_amount") is None:
            data.pop("min_order_amount", None)
        return CouponCreateCommand(**data)

    def as_fields(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class CouponUpdateCommand:
    coupon_id: str
    changes: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_raw(coupon_id: str, payload: Dict[str, Any]) -> "CouponUpdateCommand":
        changes = {k: v for k, v in dict(payload or {}).items() if k in _WRITABLE}
        if "code" in changes:
            changes["code"] = normalize_code(changes["code"])
        if "min_order_amount" in changes and changes["min_order_amount"] is None:
            changes["min_order_amount"] = Decimal("0")
        return CouponUpdateCommand(coupon_id=str(coupon_id), changes=changes)
