from __future__ import annotations

from decimal import Decimal
from typing import Optional

from apps.common import get_logger

from . import messages
from .api import StorefrontApi
from .cart import CartStore
from .exceptions import ApiError, NotAuthenticatedError
from .models import Coupon, to_decimal
from .notifications import Notifier

logger = get_logger(__name__).bind(component="storefront", layer="coupons")


class CouponValidator:
    """
    Sends a code and the order total to the server and applies the coupon to
    the cart only when the server accepts it. A busy flag rejects a second
    validation while one is in flight.
    """

    def __init__(self, api: StorefrontApi, cart: CartStore, notifier: Notifier):
        self.api = api
        self.cart = cart
        self.notifier = notifier
        self.is_validating = False
        self.log = logger.bind(store="CouponValidator")

    async def validate(self, code: str, order_total: Optional[Decimal] = None) -> bool:
        code = (code or "").strip().upper()
        if not code:
            self.notifier.error(messages.COUPON_CODE_REQUIRED)
            return False
        if self.is_validating:
            self.log.debug("Validation already in flight", code=code)
            return False

        total = self.cart.get_subtotal() if order_total is None else to_decimal(order_total)
        priced_ids = [item.template_id for item in self.cart.items]
        self.is_validating = True
        try:
            payload = await self.api.validate_coupon(code, total)
        except NotAuthenticatedError:
            self.notifier.redirect(messages.LOGIN_PATH)
            return False
        except ApiError as exc:
            self.log.warning("Coupon validation request failed", code=code, error=exc.message)
            self.notifier.error(messages.GENERIC_RETRY)
            return False
        finally:
            self.is_validating = False

        data = payload.get("data") or {}
        if not (payload.get("success") and data.get("valid") and data.get("coupon")):
            self.log.info("Coupon rejected", code=code)
            self.notifier.error(payload.get("message") or messages.COUPON_INVALID)
            return False

        # Discount was priced against the cart as it was when the request left
        if [item.template_id for item in self.cart.items] != priced_ids:
            self.log.info("Cart changed during validation, discarding reply", code=code)
            self.notifier.error(messages.GENERIC_RETRY)
            return False

        coupon = Coupon.from_payload(data["coupon"])
        self.cart.apply_coupon(coupon, data.get("calculated_discount"))
        self.log.info("Coupon applied", code=coupon.code, discount=str(self.cart.coupon_discount))
        self.notifier.success(
            messages.COUPON_APPLIED.format(formatted_discount=coupon.formatted_discount)
        )
        return True

    def remove(self) -> None:
        self.cart.remove_coupon()
        self.notifier.success(messages.COUPON_REMOVED)
