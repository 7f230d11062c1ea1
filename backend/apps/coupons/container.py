from __future__ import annotations

from .repositories import CouponRepository, CouponUsageRepository
from .services import CouponService


def build_coupon_service() -> CouponService:
    return CouponService(coupons=CouponRepository(), usages=CouponUsageRepository())
