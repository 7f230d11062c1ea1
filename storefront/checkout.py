from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from apps.common import get_logger

from . import messages
from .api import StorefrontApi
from .cart import CartStore
from .exceptions import ApiError, NotAuthenticatedError
from .notifications import Notifier

logger = get_logger(__name__).bind(component="storefront", layer="checkout")

STATUS_COMPLETED = "completed"
STATUS_PAYMENT_FAILED = "payment_failed"
STATUS_FAILED = "failed"
STATUS_NOT_AUTHENTICATED = "not_authenticated"
STATUS_EMPTY_CART = "empty_cart"
STATUS_BUSY = "busy"


@dataclass(frozen=True)
class CheckoutResult:
    status: str
    order_id: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_COMPLETED


class CheckoutFlow:
    """
    Creates an order from the cart, pays it, then clears the cart.

    The cart is only cleared once payment succeeds. An order whose payment
    failed stays ``pending`` on the server and is reported back with its id.
    """

    def __init__(self, api: StorefrontApi, cart: CartStore, notifier: Notifier):
        self.api = api
        self.cart = cart
        self.notifier = notifier
        self.is_processing = False
        self.log = logger.bind(flow="CheckoutFlow")

    def _fail(self, status: str, message: str, order_id: Optional[str] = None) -> CheckoutResult:
        self.notifier.error(message)
        return CheckoutResult(status, order_id=order_id, message=message)

    async def checkout(self) -> CheckoutResult:
        if not self.api.is_authenticated:
            self.notifier.redirect(messages.LOGIN_PATH)
            return CheckoutResult(STATUS_NOT_AUTHENTICATED)
        if self.cart.is_empty():
            self.notifier.redirect(messages.CART_PATH)
            return CheckoutResult(STATUS_EMPTY_CART)
        if self.is_processing:
            return CheckoutResult(STATUS_BUSY)

        self.is_processing = True
        try:
            return await self._run()
        except NotAuthenticatedError:
            self.notifier.redirect(messages.LOGIN_PATH)
            return CheckoutResult(STATUS_NOT_AUTHENTICATED)
        except ApiError as exc:
            self.log.warning("Checkout request failed", error=exc.message)
            return self._fail(STATUS_FAILED, messages.CHECKOUT_FAILED)
        finally:
            self.is_processing = False

    async def _run(self) -> CheckoutResult:
        items = [{"template_id": item.template_id} for item in self.cart.items]
        coupon_code = self.cart.coupon.code if self.cart.coupon else None
        self.log.info("Creating order", items=len(items), coupon=coupon_code)

        created = await self.api.create_order(items, coupon_code=coupon_code)
        order = created.get("data") or {}
        order_id = order.get("id") if isinstance(order, dict) else None
        if not created.get("success") or not order_id:
            self.log.info("Order creation rejected", server_message=created.get("message"))
            return self._fail(STATUS_FAILED, created.get("message") or messages.ORDER_CREATE_FAILED)

        order_id = str(order_id)
        try:
            paid = await self.api.pay_order(order_id)
        except NotAuthenticatedError:
            self.log.info("Session expired before payment", order_id=order_id)
            self.notifier.redirect(messages.LOGIN_PATH)
            return CheckoutResult(STATUS_NOT_AUTHENTICATED, order_id=order_id)
        except ApiError as exc:
            self.log.warning("Payment request failed", order_id=order_id, error=exc.message)
            return self._fail(STATUS_PAYMENT_FAILED, messages.CHECKOUT_FAILED, order_id=order_id)
        if not paid.get("success"):
            self.log.warning("Payment failed for created order", order_id=order_id)
            return self._fail(
                STATUS_PAYMENT_FAILED,
                paid.get("message") or messages.CHECKOUT_FAILED,
                order_id=order_id,
            )

        self.cart.clear_cart()
        self.log.info("Checkout completed", order_id=order_id)
        self.notifier.success(messages.CHECKOUT_SUCCEEDED)
        self.notifier.redirect(messages.ORDER_SUCCESS_PATH)
        return CheckoutResult(STATUS_COMPLETED, order_id=order_id, message=messages.CHECKOUT_SUCCEEDED)
