from typing import Iterable, List, Optional

from apps.catalog.mappers import TemplateMapper

from .dtos import WishlistEntryDTO
from .models import Wishlist


class WishlistMapper:
    @staticmethod
    def to_dto(entry: Wishlist, *, language: Optional[str] = None) -> WishlistEntryDTO:
        return WishlistEntryDTO(
            id=str(entry.id),
            template_id=str(entry.template_id),
            template=TemplateMapper.to_dto(entry.template, language=language),
            added_at=entry.created_at,
        )

    @staticmethod
    def many_to_dto(
        entries: Iterable[Wishlist], *, language: Optional[str] = None
    ) -> List[WishlistEntryDTO]:
        return [WishlistMapper.to_dto(e, language=language) for e in entries]
