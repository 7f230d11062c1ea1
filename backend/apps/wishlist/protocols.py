from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

from apps.catalog.models import Template

from .models import Wishlist


class WishlistRepositoryProtocol(Protocol):
    def find(self, user_id, template_id) -> Optional[Wishlist]:
        ...

    def create(self, **data) -> Wishlist:
        ...

    def delete(self, entry: Wishlist) -> None:
        ...

    def template_ids_for_user(self, user_id) -> List[str]:
        ...

    def active_entries_for_user(self, user_id) -> Iterable[Wishlist]:
        ...

    def clear_for_user(self, user_id) -> int:
        ...


class TemplateLookupProtocol(Protocol):
    def get_active(self, template_id) -> Optional[Template]:
        ...
