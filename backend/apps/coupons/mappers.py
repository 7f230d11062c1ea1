from typing import Any, Dict, Iterable, List, Optional

from apps.common.i18n import localized

from .dtos import CouponDTO
from .models import Coupon


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class CouponMapper:
    @staticmethod
    def to_dto(coupon: Coupon) -> CouponDTO:
        return CouponDTO(
            id=str(coupon.id),
            code=coupon.code,
            description_ar=coupon.description_ar,
            description_en=coupon.description_en,
            discount_type=coupon.discount_type,
            discount_value=coupon.discount_value,
            formatted_discount=coupon.formatted_discount,
            max_discount=coupon.max_discount,
            min_order_amount=coupon.min_order_amount,
            max_uses=coupon.max_uses,
            used_count=coupon.used_count,
            max_uses_per_user=coupon.max_uses_per_user,
            starts_at=coupon.starts_at,
            expires_at=coupon.expires_at,
            is_active=coupon.is_active,
        )

    @staticmethod
    def many_to_dto(coupons: Iterable[Coupon]) -> List[CouponDTO]:
        return [CouponMapper.to_dto(c) for c in coupons]

    @staticmethod
    def to_public(coupon: Coupon, *, language: Optional[str] = None) -> Dict[str, Any]:
        """Shape shown to shoppers once a code validates."""
        return {
            "id": str(coupon.id),
            "code": coupon.code,
            "description": localized(coupon, "description", language),
            "discount_type": coupon.discount_type,
            "discount_value": float(coupon.discount_value),
            "formatted_discount": coupon.formatted_discount,
            "min_order_amount": float(coupon.min_order_amount),
            "max_discount": _as_float(coupon.max_discount),
            "expires_at": coupon.expires_at.isoformat() if coupon.expires_at else None,
        }
