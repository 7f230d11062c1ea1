import json
from decimal import Decimal

import httpx
import pytest
import respx
from httpx import Response

from storefront.api import StorefrontApi
from storefront.config import StorefrontSettings
from storefront.exceptions import ApiError, NotAuthenticatedError

BASE = "http://shop.test/api"


@pytest.fixture
def settings():
    return StorefrontSettings(api_url=BASE + "/")


@pytest.fixture
async def api(settings):
    client = StorefrontApi(settings)
    yield client
    await client.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_login_stores_bearer_token(api):
    respx.post(f"{BASE}/auth/login/").mock(
        return_value=Response(
            200, json={"success": True, "data": {"access": "acc", "refresh": "ref"}}
        )
    )
    wishlist = respx.get(f"{BASE}/wishlist/ids").mock(
        return_value=Response(200, json={"success": True, "data": ["t1"]})
    )

    await api.login("teacher", "secret")
    assert api.is_authenticated

    payload = await api.get_wishlist_ids()
    assert payload["data"] == ["t1"]
    assert wishlist.calls.last.request.headers["Authorization"] == "Bearer acc"


@pytest.mark.asyncio
@respx.mock
async def test_validate_coupon_posts_decimal_total_as_string(api):
    route = respx.post(f"{BASE}/coupons/validate").mock(
        return_value=Response(200, json={"success": True, "data": {"valid": True}})
    )

    await api.validate_coupon("WELCOME10", Decimal("150.50"))

    body = json.loads(route.calls.last.request.content)
    assert body == {"code": "WELCOME10", "order_total": "150.50"}


@pytest.mark.asyncio
@respx.mock
async def test_error_envelope_is_returned_not_raised(api):
    respx.post(f"{BASE}/coupons/validate").mock(
        return_value=Response(
            404,
            json={
                "success": False,
                "message": "كود الخصم غير صالح",
                "error": {"code": "NOT_FOUND", "status": 404},
            },
        )
    )

    payload = await api.validate_coupon("NOPE", Decimal("10"))
    assert payload["success"] is False
    assert payload["message"] == "كود الخصم غير صالح"


@pytest.mark.asyncio
@respx.mock
async def test_401_clears_token_and_raises(api):
    api.set_token("stale")
    respx.post(f"{BASE}/wishlist/toggle/t1").mock(
        return_value=Response(401, json={"success": False, "message": "يجب تسجيل الدخول أولاً"})
    )

    with pytest.raises(NotAuthenticatedError) as exc:
        await api.toggle_wishlist("t1")
    assert exc.value.status_code == 401
    assert exc.value.payload["message"] == "يجب تسجيل الدخول أولاً"
    assert not api.is_authenticated


@pytest.mark.asyncio
@respx.mock
async def test_non_envelope_response_raises(api):
    respx.post(f"{BASE}/orders").mock(return_value=Response(502, text="Bad gateway"))

    with pytest.raises(ApiError) as exc:
        await api.create_order([{"template_id": "t1"}])
    assert exc.value.status_code == 502


@pytest.mark.asyncio
@respx.mock
async def test_transport_error_raises_api_error(api):
    respx.post(f"{BASE}/orders/o1/pay").mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(ApiError):
        await api.pay_order("o1")


@pytest.mark.asyncio
@respx.mock
async def test_create_order_sends_coupon_only_when_set(api):
    route = respx.post(f"{BASE}/orders").mock(
        return_value=Response(201, json={"success": True, "data": {"id": "o1"}})
    )

    await api.create_order([{"template_id": "t1"}])
    await api.create_order([{"template_id": "t1"}], coupon_code="SAVE20")

    first, second = (json.loads(c.request.content) for c in route.calls)
    assert first == {"items": [{"template_id": "t1"}]}
    assert second == {"items": [{"template_id": "t1"}], "coupon_code": "SAVE20"}


@pytest.mark.asyncio
@respx.mock
async def test_list_templates_passes_filters(api):
    route = respx.get(f"{BASE}/templates/").mock(
        return_value=Response(200, json={"success": True, "data": [], "meta": {}})
    )

    await api.list_templates(page=2, limit=5, template_type="interactive")

    params = route.calls.last.request.url.params
    assert params["page"] == "2"
    assert params["limit"] == "5"
    assert params["type"] == "interactive"
