from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional, Union

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import status

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from apps.common.i18n import Messages

from .commands import CouponCreateCommand, CouponUpdateCommand, normalize_code
from .dtos import CouponDTO, CouponValidationDTO
from .mappers import CouponMapper
from .models import Coupon, DiscountType
from .protocols import CouponRepositoryProtocol, CouponUsageRepositoryProtocol

logger = get_logger(__name__).bind(component="coupons", layer="service")

TWO_PLACES = Decimal("0.01")


class CouponService:
    def __init__(
        self,
        coupons: CouponRepositoryProtocol,
        usages: CouponUsageRepositoryProtocol,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.coupons = coupons
        self.usages = usages
        self.clock = clock
        self.logger = logger.bind(service="CouponService")

    # Validation
    def invalid_reason(self, coupon: Coupon) -> Optional[str]:
        """First failing validity rule as a shopper-facing message, else ``None``."""
        if not coupon.is_active:
            return Messages.COUPON_INACTIVE
        now = self.clock()
        if coupon.starts_at and now < coupon.starts_at:
            return Messages.COUPON_NOT_STARTED
        if coupon.expires_at and now > coupon.expires_at:
            return Messages.COUPON_EXPIRED
        if coupon.max_uses is not None and coupon.used_count >= coupon.max_uses:
            return Messages.COUPON_EXHAUSTED
        return None

    def _user_limit_reached(self, coupon: Coupon, user_id) -> bool:
        if user_id is None or coupon.max_uses_per_user is None:
            return False
        used = self.usages.count_for_user(coupon.id, user_id)
        return used >= coupon.max_uses_per_user

    def find_usable(self, code: str, order_total: Decimal, user_id=None) -> Coupon:
        """
        Look up ``code`` and run every validity rule against ``order_total``.

        Raises ``ApplicationError`` carrying ``{"valid": false, "error": ...}``
        as payload on the first failing rule.
        """
        code = normalize_code(code)
        coupon = self.coupons.get_by_code(code)
        if coupon is None:
            self.logger.info("Coupon not found", code=code)
            raise ApplicationError(
                "NOT_FOUND",
                Messages.COUPON_NOT_FOUND,
                status_code=status.HTTP_404_NOT_FOUND,
                data={"valid": False, "error": "not_found"},
            )
        reason = self.invalid_reason(coupon)
        if reason is not None:
            self.logger.info("Coupon rejected", code=code, reason=reason)
            raise ApplicationError(
                "COUPON_INVALID",
                reason,
                status_code=status.HTTP_400_BAD_REQUEST,
                data={"valid": False, "error": "invalid"},
            )
        if self._user_limit_reached(coupon, user_id):
            self.logger.info("Coupon per-user limit reached", code=code, user_id=user_id)
            raise ApplicationError(
                "COUPON_USER_LIMIT",
                Messages.COUPON_USER_LIMIT,
                status_code=status.HTTP_400_BAD_REQUEST,
                data={"valid": False, "error": "user_limit_exceeded"},
            )
        if not coupon.applies_to(order_total):
            self.logger.info(
                "Coupon minimum order not met",
                code=code,
                order_total=str(order_total),
                min_order_amount=str(coupon.min_order_amount),
            )
            raise ApplicationError(
                "COUPON_MIN_ORDER",
                Messages.COUPON_MIN_ORDER.format(
                    amount=coupon.min_order_amount,
                    currency=getattr(settings, "CURRENCY_LABEL", "ر.س"),
                ),
                status_code=status.HTTP_400_BAD_REQUEST,
                data={
                    "valid": False,
                    "error": "min_order_not_met",
                    "min_order_amount": float(coupon.min_order_amount),
                },
            )
        return coupon

    def validate_coupon(
        self,
        code: str,
        order_total: Union[Decimal, int, float, str] = 0,
        *,
        user_id=None,
        language: Optional[str] = None,
    ) -> CouponValidationDTO:
        order_total = Decimal(str(order_total or 0))
        self.logger.debug("Validating coupon", code=code, order_total=str(order_total))
        coupon = self.find_usable(code, order_total, user_id)
        discount = coupon.calculate_discount(order_total)
        new_total = (order_total - discount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        self.logger.info("Coupon validated", code=coupon.code, discount=str(discount))
        return CouponValidationDTO(
            valid=True,
            coupon=CouponMapper.to_public(coupon, language=language),
            calculated_discount=discount,
            new_total=new_total,
        )

    def record_usage(self, coupon: Coupon, *, user_id, order_id, discount_amount: Decimal):
        with transaction.atomic():
            self.coupons.increment_usage(coupon)
            usage = self.usages.create(
                coupon_id=coupon.id,
                user_id=user_id,
                order_id=order_id,
                discount_amount=discount_amount,
            )
        self.logger.info(
            "Recorded coupon usage",
            code=coupon.code,
            user_id=user_id,
            order_id=str(order_id),
        )
        return usage

    # Admin
    def list_coupons(self, *, active_only: bool = False) -> List[CouponDTO]:
        self.logger.debug("Listing coupons", active_only=active_only)
        return CouponMapper.many_to_dto(self.coupons.list_recent(active_only))

    def _check_percentage(self, discount_type: str, discount_value) -> None:
        if (
            discount_type == DiscountType.PERCENTAGE
            and discount_value is not None
            and Decimal(discount_value) > 100
        ):
            raise ApplicationError(
                "UNPROCESSABLE_ENTITY",
                Messages.COUPON_PERCENT_TOO_HIGH,
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )

    def _code_taken(self, code: str) -> ApplicationError:
        return ApplicationError(
            "VALIDATION_ERROR",
            Messages.VALIDATION_FAILED,
            details={"code": [Messages.COUPON_CODE_TAKEN]},
        )

    def create_coupon(self, data: Union[dict, CouponCreateCommand]) -> CouponDTO:
        cmd = data if isinstance(data, CouponCreateCommand) else CouponCreateCommand.from_raw(data)
        self._check_percentage(cmd.discount_type, cmd.discount_value)
        if self.coupons.exists(code=cmd.code):
            raise self._code_taken(cmd.code)
        self.logger.info("Creating coupon", code=cmd.code)
        try:
            coupon = self.coupons.create(**cmd.as_fields())
        except IntegrityError:
            raise self._code_taken(cmd.code)
        return CouponMapper.to_dto(coupon)

    def _get_or_404(self, coupon_id) -> Coupon:
        coupon = self.coupons.get(id=coupon_id)
        if coupon is None:
            self.logger.info("Coupon not found", coupon_id=coupon_id)
            raise ApplicationError("NOT_FOUND", Messages.NOT_FOUND, details={"id": str(coupon_id)})
        return coupon

    def update_coupon(
        self, coupon_id, data: Union[dict, CouponUpdateCommand]
    ) -> CouponDTO:
        cmd = (
            data
            if isinstance(data, CouponUpdateCommand)
            else CouponUpdateCommand.from_raw(coupon_id, data)
        )
        coupon = self._get_or_404(coupon_id)
        changes = cmd.changes
        self._check_percentage(
            changes.get("discount_type", coupon.discount_type),
            changes.get("discount_value", coupon.discount_value),
        )
        new_code = changes.get("code")
        if new_code and new_code != coupon.code and self.coupons.exists(code=new_code):
            raise self._code_taken(new_code)
        self.logger.info("Updating coupon", coupon_id=str(coupon.id), fields=sorted(changes))
        coupon = self.coupons.update(coupon, **changes)
        return CouponMapper.to_dto(coupon)

    def delete_coupon(self, coupon_id) -> None:
        coupon = self._get_or_404(coupon_id)
        self.coupons.delete(coupon)
        self.logger.info("Coupon deleted", coupon_id=str(coupon_id), code=coupon.code)
