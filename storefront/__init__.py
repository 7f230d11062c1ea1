from .cart import CartStore
from .checkout import CheckoutFlow, CheckoutResult
from .config import StorefrontSettings, load_settings
from .coupons import CouponValidator
from .exceptions import ApiError, NotAuthenticatedError, StorefrontError
from .session import Storefront, build_storefront
from .wishlist import WishlistStore

__all__ = [
    "ApiError",
    "CartStore",
    "CheckoutFlow",
    "CheckoutResult",
    "CouponValidator",
    "NotAuthenticatedError",
    "Storefront",
    "StorefrontError",
    "StorefrontSettings",
    "WishlistStore",
    "build_storefront",
    "load_settings",
]
