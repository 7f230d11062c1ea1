import json

import httpx
import pytest
import respx
from httpx import Response

from storefront import build_storefront, messages
from storefront.config import StorefrontSettings, load_settings
from storefront.models import CartItem
from storefront.notifications import MessageLog
from storefront.persistence import CART_STORAGE_KEY, JsonFileStorage, MemoryStorage

BASE = "http://shop.test/api"


def test_load_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("STOREFRONT_API_URL", "https://store.example.com/api/")
    monkeypatch.setenv("STOREFRONT_STATE_DIR", str(tmp_path))
    monkeypatch.setenv("STOREFRONT_TIMEOUT", "2.5")

    settings = load_settings(env_file=tmp_path / "missing.env")

    assert settings.base_url == "https://store.example.com/api"
    assert settings.state_dir == str(tmp_path)
    assert settings.timeout == 2.5


@pytest.mark.asyncio
async def test_build_storefront_uses_file_storage_for_state_dir(tmp_path):
    shop = build_storefront(StorefrontSettings(api_url=BASE, state_dir=str(tmp_path)))
    try:
        assert isinstance(shop.storage, JsonFileStorage)
        assert shop.coupons.cart is shop.cart
        assert shop.checkout.cart is shop.cart
        assert shop.wishlist.api is shop.api
    finally:
        await shop.aclose()


@pytest.mark.asyncio
async def test_context_manager_restores_cart():
    storage = MemoryStorage()
    item = CartItem.from_template({"id": "t1", "name": "شهادة", "price": 20})
    storage.set_item(
        CART_STORAGE_KEY, json.dumps({"state": {"items": [item.to_dict()]}, "version": 0})
    )

    async with build_storefront(StorefrontSettings(api_url=BASE), storage=storage) as shop:
        assert shop.cart.has_item("t1")


@pytest.mark.asyncio
@respx.mock
async def test_login_then_checkout_round_trip():
    notifier = MessageLog()
    shop = build_storefront(
        StorefrontSettings(api_url=BASE),
        storage=MemoryStorage(),
        notifier=notifier,
        client=httpx.AsyncClient(),
    )
    respx.post(f"{BASE}/auth/login/").mock(
        return_value=Response(200, json={"success": True, "data": {"access": "a", "refresh": "r"}})
    )
    respx.get(f"{BASE}/wishlist/ids").mock(
        return_value=Response(200, json={"success": True, "data": ["t9"]})
    )
    respx.post(f"{BASE}/orders").mock(
        return_value=Response(201, json={"success": True, "data": {"id": "o1"}})
    )
    respx.post(f"{BASE}/orders/o1/pay").mock(
        return_value=Response(200, json={"success": True, "data": {"id": "o1"}})
    )

    try:
        assert await shop.login("teacher", "secret") is True
        assert shop.wishlist.is_wishlisted("t9")

        shop.cart.add_item(CartItem.from_template({"id": "t1", "name": "شهادة", "price": 20}))
        result = await shop.checkout.checkout()

        assert result.ok
        assert shop.cart.is_empty()
        assert notifier.redirects == [messages.ORDER_SUCCESS_PATH]
    finally:
        await shop.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_login_with_bad_credentials_shows_server_message():
    notifier = MessageLog()
    shop = build_storefront(
        StorefrontSettings(api_url=BASE), storage=MemoryStorage(), notifier=notifier
    )
    respx.post(f"{BASE}/auth/login/").mock(
        return_value=Response(
            401, json={"success": False, "message": "بيانات الدخول غير صحيحة"}
        )
    )
    try:
        assert await shop.login("teacher", "wrong") is False
        assert notifier.errors == ["بيانات الدخول غير صحيحة"]
    finally:
        await shop.aclose()
