from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


@dataclass(frozen=True)
class CartItem:
    template_id: str
    name: str
    price: Decimal
    thumbnail: str = ""
    type: str = "ready"

    @classmethod
    def from_template(cls, payload: Mapping[str, Any]) -> "CartItem":
        """Build an item from a catalog template payload, at its effective price."""
        price = payload.get("effective_price")
        if price is None:
            price = payload.get("discount_price") or payload.get("price")
        return cls(
            template_id=str(payload["id"]),
            name=str(payload.get("name") or payload.get("slug") or ""),
            price=to_decimal(price),
            thumbnail=str(payload.get("thumbnail_url") or ""),
            type=str(payload.get("type") or "ready"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartItem":
        return cls(
            template_id=str(data["template_id"]),
            name=str(data.get("name", "")),
            price=to_decimal(data.get("price")),
            thumbnail=str(data.get("thumbnail", "")),
            type=str(data.get("type", "ready")),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["price"] = str(self.price)
        return data


@dataclass(frozen=True)
class Coupon:
    code: str
    description: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[Decimal] = None
    formatted_discount: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Coupon":
        value = payload.get("discount_value")
        return cls(
            code=str(payload.get("code", "")),
            description=payload.get("description"),
            discount_type=payload.get("discount_type"),
            discount_value=to_decimal(value) if value is not None else None,
            formatted_discount=str(payload.get("formatted_discount") or ""),
        )
