from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from apps.catalog.dtos import TemplateDTO


@dataclass
class WishlistToggleDTO:
    action: str
    template_id: str
    is_wishlisted: bool
    wishlist_id: Optional[str] = None


@dataclass
class WishlistEntryDTO:
    id: str
    template_id: str
    template: TemplateDTO
    added_at: datetime
