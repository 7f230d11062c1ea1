from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from apps.common import get_logger

from . import messages
from .api import StorefrontApi
from .cart import CartStore
from .checkout import CheckoutFlow
from .config import StorefrontSettings, load_settings
from .coupons import CouponValidator
from .exceptions import ApiError, NotAuthenticatedError
from .notifications import MessageLog, Notifier
from .persistence import JsonFileStorage, MemoryStorage, Storage
from .wishlist import WishlistStore

logger = get_logger(__name__).bind(component="storefront", layer="session")


@dataclass
class Storefront:
    """Everything one shopper session needs, wired together."""

    settings: StorefrontSettings
    storage: Storage
    notifier: Notifier
    api: StorefrontApi
    cart: CartStore
    wishlist: WishlistStore
    coupons: CouponValidator
    checkout: CheckoutFlow

    def load(self) -> None:
        self.cart.load()
        self.wishlist.load()

    async def login(self, username: str, password: str) -> bool:
        """Log in and pull the server's wishlist for the new session."""
        try:
            payload = await self.api.login(username, password)
        except NotAuthenticatedError as exc:
            self.notifier.error((exc.payload or {}).get("message") or messages.SESSION_EXPIRED)
            return False
        except ApiError as exc:
            logger.warning("Login request failed", error=exc.message)
            self.notifier.error(messages.GENERIC_RETRY)
            return False
        if not self.api.is_authenticated:
            self.notifier.error(payload.get("message") or messages.GENERIC_RETRY)
            return False
        await self.wishlist.fetch_wishlist_ids()
        return True

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "Storefront":
        self.load()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def build_storefront(
    settings: Optional[StorefrontSettings] = None,
    storage: Optional[Storage] = None,
    notifier: Optional[Notifier] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Storefront:
    settings = settings or load_settings()
    if storage is None:
        storage = JsonFileStorage(settings.state_dir) if settings.state_dir else MemoryStorage()
    notifier = notifier or MessageLog()
    api = StorefrontApi(settings, client=client)
    cart = CartStore(storage)
    logger.debug("Storefront built", api_url=settings.base_url, storage=type(storage).__name__)
    return Storefront(
        settings=settings,
        storage=storage,
        notifier=notifier,
        api=api,
        cart=cart,
        wishlist=WishlistStore(api, notifier, storage),
        coupons=CouponValidator(api, cart, notifier),
        checkout=CheckoutFlow(api, cart, notifier),
    )
