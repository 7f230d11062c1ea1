import asyncio
from decimal import Decimal

import pytest

from storefront import messages
from storefront.cart import CartStore
from storefront.coupons import CouponValidator
from storefront.models import CartItem, Coupon
from storefront.notifications import MessageLog

from .fakes import FakeApi, network_error, unauthenticated

VALID = {
    "success": True,
    "message": "كود الخصم صالح",
    "data": {
        "valid": True,
        "coupon": {
            "id": "c1",
            "code": "WELCOME10",
            "description": "خصم ترحيبي",
            "discount_type": "percentage",
            "discount_value": 10.0,
            "formatted_discount": "10%",
        },
        "calculated_discount": 15.0,
        "new_total": 135.0,
    },
}


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def notifier():
    return MessageLog()


@pytest.fixture
def cart():
    cart = CartStore()
    cart.add_item(CartItem("A", "قالب أ", Decimal("100")))
    cart.add_item(CartItem("B", "قالب ب", Decimal("50")))
    return cart


@pytest.fixture
def validator(api, cart, notifier):
    return CouponValidator(api, cart, notifier)


@pytest.mark.asyncio
async def test_valid_code_is_upper_cased_and_applied(validator, api, cart, notifier):
    api.queue("validate_coupon", VALID)

    assert await validator.validate("  welcome10 ") is True
    assert api.calls == [("validate_coupon", ("WELCOME10", Decimal("150")), {})]
    assert cart.coupon.code == "WELCOME10"
    assert cart.coupon_discount == Decimal("15.0")
    assert cart.get_total() == Decimal("135.0")
    assert notifier.successes == [messages.COUPON_APPLIED.format(formatted_discount="10%")]
    assert validator.is_validating is False


@pytest.mark.asyncio
async def test_rejection_shows_server_message_without_mutation(validator, api, cart, notifier):
    api.queue(
        "validate_coupon",
        {
            "success": False,
            "message": "الحد الأدنى للطلب 200.00 ر.س",
            "data": {"valid": False, "error": "min_order_not_met", "min_order_amount": 200.0},
        },
    )

    assert await validator.validate("SAVE20") is False
    assert cart.coupon is None
    assert cart.get_total() == Decimal("150")
    assert notifier.errors == ["الحد الأدنى للطلب 200.00 ر.س"]


@pytest.mark.asyncio
async def test_rejection_keeps_previously_applied_coupon(validator, api, cart):
    cart.apply_coupon(Coupon(code="OLD"), Decimal("5"))
    api.queue("validate_coupon", {"success": False, "message": ""})

    assert await validator.validate("BAD") is False
    assert cart.coupon.code == "OLD"


@pytest.mark.asyncio
async def test_empty_code_never_calls_server(validator, api, notifier):
    assert await validator.validate("   ") is False
    assert api.calls == []
    assert notifier.errors == [messages.COUPON_CODE_REQUIRED]


@pytest.mark.asyncio
async def test_network_failure_shows_retry(validator, api, cart, notifier):
    api.queue("validate_coupon", network_error())

    assert await validator.validate("WELCOME10") is False
    assert cart.coupon is None
    assert notifier.errors == [messages.GENERIC_RETRY]
    assert validator.is_validating is False


@pytest.mark.asyncio
async def test_unauthenticated_redirects(validator, api, notifier):
    api.queue("validate_coupon", unauthenticated())

    assert await validator.validate("WELCOME10") is False
    assert notifier.redirects == [messages.LOGIN_PATH]


@pytest.mark.asyncio
async def test_busy_flag_blocks_second_validation(validator, api):
    validator.is_validating = True

    assert await validator.validate("WELCOME10") is False
    assert api.calls == []


@pytest.mark.asyncio
async def test_explicit_order_total_is_sent(validator, api):
    api.queue("validate_coupon", VALID)

    await validator.validate("welcome10", order_total="300")
    assert api.calls[0][1] == ("WELCOME10", Decimal("300"))


def test_remove_clears_coupon(validator, cart, notifier):
    cart.apply_coupon(Coupon(code="X"), Decimal("10"))
    validator.remove()
    assert cart.coupon is None
    assert notifier.successes == [messages.COUPON_REMOVED]


@pytest.mark.asyncio
async def test_reply_for_changed_cart_is_discarded(validator, api, cart, notifier):
    reply = asyncio.get_running_loop().create_future()
    api.queue("validate_coupon", reply)

    pending = asyncio.create_task(validator.validate("WELCOME10"))
    await asyncio.sleep(0)
    assert validator.is_validating is True

    cart.remove_item("A")
    reply.set_result(VALID)

    assert await pending is False
    assert cart.coupon is None
    assert cart.coupon_discount == Decimal("0")
    assert cart.get_total() == Decimal("50")
    assert notifier.errors == [messages.GENERIC_RETRY]
    assert notifier.successes == []
