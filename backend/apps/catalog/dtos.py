from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class TemplateDTO:
    id: str
    name: str
    slug: str
    description: str
    price: Decimal
    discount_price: Optional[Decimal]
    effective_price: Decimal
    thumbnail_url: str
    type: str
    downloads_count: int
