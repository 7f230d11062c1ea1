from __future__ import annotations

from typing import List, Optional

from apps.common import get_logger
from apps.common.i18n import normalize_language_code

from .dtos import TemplateDTO
from .mappers import TemplateMapper
from .models import TemplateType
from .protocols import CacheBackendProtocol, TemplateRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class TemplateService:
    def __init__(
        self,
        templates: TemplateRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.templates = templates
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="TemplateService")
        self._cache_prefix = "templates:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def invalidate_list_cache(self) -> None:
        v = self._get_cache_version()
        # Version key never expires
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.debug("Bumped template cache version", new_version=v + 1)

    def _cache_key(self, template_type: Optional[str], language: str) -> str:
        version = self._get_cache_version()
        return f"{self._cache_prefix}:v{version}:{template_type or 'all'}:lang-{language}"

    @staticmethod
    def normalize_type(template_type: Optional[str]) -> Optional[str]:
        if not template_type:
            return None
        value = template_type.strip().lower()
        return value if value in TemplateType.values else None

    def list_templates(
        self, template_type: Optional[str] = None, *, language: Optional[str] = None
    ) -> List[TemplateDTO]:
        language = normalize_language_code(language)
        template_type = self.normalize_type(template_type)
        self.logger.debug(
            "Listing templates",
            type=template_type,
            cache_enabled=not self.disable_cache,
            language=language,
        )
        if self.disable_cache:
            return TemplateMapper.many_to_dto(
                self.templates.list_active(template_type), language=language
            )
        key = self._cache_key(template_type, language)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Template list cache hit", cache_key=key)
            return cached
        self.logger.debug("Template list cache miss", cache_key=key)
        data = TemplateMapper.many_to_dto(
            self.templates.list_active(template_type), language=language
        )
        self.cache.set(key, data)
        return data

    def get_template(
        self, identifier: str, *, language: Optional[str] = None
    ) -> Optional[TemplateDTO]:
        language = normalize_language_code(language)
        self.logger.debug("Fetching template", identifier=identifier, language=language)
        template = self.templates.find_by_identifier(str(identifier))
        if template is None:
            self.logger.info("Template not found", identifier=identifier)
            return None
        return TemplateMapper.to_dto(template, language=language)
