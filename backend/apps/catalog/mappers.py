from typing import Iterable, List, Optional

from apps.common.i18n import localized

from .dtos import TemplateDTO
from .models import Template


class TemplateMapper:
    @staticmethod
    def to_dto(template: Template, *, language: Optional[str] = None) -> TemplateDTO:
        return TemplateDTO(
            id=str(template.id),
            name=localized(template, "name", language) or template.slug,
            slug=template.slug,
            description=template.description or "",
            price=template.price,
            discount_price=template.discount_price,
            effective_price=template.effective_price,
            thumbnail_url=template.thumbnail_url or "",
            type=template.type,
            downloads_count=template.downloads_count,
        )

    @staticmethod
    def many_to_dto(
        templates: Iterable[Template], *, language: Optional[str] = None
    ) -> List[TemplateDTO]:
        return [TemplateMapper.to_dto(t, language=language) for t in templates]
