import uuid
from typing import Iterable, Optional

from django.db.models import F

from apps.common.repository import GenericRepository
from .models import Template


class TemplateRepository(GenericRepository[Template]):
    def __init__(self):
        super().__init__(Template)

    def list_active(self, template_type: Optional[str] = None):
        qs = self.model.objects.filter(is_active=True)
        if template_type:
            qs = qs.filter(type=template_type)
        return qs

    def get_active(self, template_id) -> Optional[Template]:
        try:
            pk = uuid.UUID(str(template_id))
        except (TypeError, ValueError, AttributeError):
            return None
        return self.model.objects.filter(id=pk, is_active=True).first()

    def find_by_identifier(self, identifier: str) -> Optional[Template]:
        """Resolve an active template by UUID, then by slug."""
        template = self.get_active(identifier)
        if template is not None:
            return template
        return self.model.objects.filter(slug=identifier, is_active=True).first()

    def increment_downloads(self, template_ids: Iterable) -> int:
        return self.model.objects.filter(id__in=list(template_ids)).update(
            downloads_count=F("downloads_count") + 1
        )
