from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from apps.common import get_logger

from .models import CartItem, Coupon, to_decimal
from .persistence import CART_STORAGE_KEY, Storage, load_state, save_state

logger = get_logger(__name__).bind(component="storefront", layer="cart")

ZERO = Decimal("0")


class CartStore:
    """
    Cart contents plus the currently applied coupon.

    Only ``items`` are persisted; a coupon never survives a restart and is
    always re-validated by the server.
    """

    def __init__(self, storage: Optional[Storage] = None):
        self.storage = storage
        self.items: List[CartItem] = []
        self.coupon: Optional[Coupon] = None
        self.coupon_discount: Decimal = ZERO
        self.log = logger.bind(store="CartStore")

    # Persistence
    def load(self) -> None:
        if self.storage is None:
            return
        state = load_state(self.storage, CART_STORAGE_KEY) or {}
        items: List[CartItem] = []
        seen = set()
        for raw in state.get("items") or []:
            try:
                item = CartItem.from_dict(raw)
            except (KeyError, TypeError, ArithmeticError):
                self.log.warning("Skipping malformed persisted cart item", item=raw)
                continue
            if item.template_id in seen:
                continue
            seen.add(item.template_id)
            items.append(item)
        self.items = items
        self.log.debug("Cart restored", items=len(items))

    def _persist(self) -> None:
        if self.storage is None:
            return
        save_state(self.storage, CART_STORAGE_KEY, {"items": [i.to_dict() for i in self.items]})

    # Queries
    def has_item(self, template_id: str) -> bool:
        return any(i.template_id == template_id for i in self.items)

    def get_item_count(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    def get_subtotal(self) -> Decimal:
        return sum((i.price for i in self.items), ZERO)

    def get_total(self) -> Decimal:
        return max(self.get_subtotal() - self.coupon_discount, ZERO)

    # Mutations
    def add_item(self, item: CartItem) -> None:
        if self.has_item(item.template_id):
            return
        self.items.append(item)
        self._persist()
        self.log.debug("Item added", template_id=item.template_id)

    def remove_item(self, template_id: str) -> None:
        remaining = [i for i in self.items if i.template_id != template_id]
        if len(remaining) == len(self.items):
            return
        self.items = remaining
        # Discount was priced against the old subtotal
        self.remove_coupon()
        self._persist()
        self.log.debug("Item removed", template_id=template_id)

    def clear_cart(self) -> None:
        self.items = []
        self.remove_coupon()
        self._persist()

    def apply_coupon(self, coupon: Coupon, discount) -> None:
        """Store a server-validated coupon and the discount the server computed."""
        self.coupon = coupon
        self.coupon_discount = to_decimal(discount)

    def remove_coupon(self) -> None:
        self.coupon = None
        self.coupon_discount = ZERO
