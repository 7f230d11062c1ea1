from __future__ import annotations

from django.core.cache import cache

from .repositories import TemplateRepository
from .services import TemplateService


def build_template_service(*, disable_cache: bool = False) -> TemplateService:
    return TemplateService(
        templates=TemplateRepository(),
        cache_backend=cache,
        disable_cache=disable_cache,
    )
