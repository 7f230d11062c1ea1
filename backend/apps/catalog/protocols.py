from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from .models import Template


class TemplateRepositoryProtocol(Protocol):
    def list_active(self, template_type: Optional[str] = None) -> Iterable[Template]:
        ...

    def get_active(self, template_id) -> Optional[Template]:
        ...

    def find_by_identifier(self, identifier: str) -> Optional[Template]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...
