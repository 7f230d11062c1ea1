from __future__ import annotations

from typing import List, Optional

from django.db import IntegrityError, transaction
from rest_framework import status

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from apps.common.i18n import Messages

from .dtos import WishlistEntryDTO, WishlistToggleDTO
from .mappers import WishlistMapper
from .protocols import TemplateLookupProtocol, WishlistRepositoryProtocol

logger = get_logger(__name__).bind(component="wishlist", layer="service")

ACTION_ADDED = "added"
ACTION_REMOVED = "removed"


class WishlistService:
    def __init__(
        self,
        wishlists: WishlistRepositoryProtocol,
        templates: TemplateLookupProtocol,
    ):
        self.wishlists = wishlists
        self.templates = templates
        self.logger = logger.bind(service="WishlistService")

    def toggle(self, user_id, template_id) -> WishlistToggleDTO:
        """
        Flip membership of ``template_id`` for ``user_id``.

        The returned ``is_wishlisted`` is the state after the flip; clients
        treat it as ground truth.
        """
        template = self.templates.get_active(template_id)
        if template is None:
            self.logger.info(
                "Wishlist toggle rejected: template unavailable",
                user_id=user_id,
                template_id=str(template_id),
            )
            raise ApplicationError(
                "NOT_FOUND",
                Messages.TEMPLATE_UNAVAILABLE,
                status_code=status.HTTP_404_NOT_FOUND,
            )
        template_id = str(template.id)
        existing = self.wishlists.find(user_id, template_id)
        if existing is not None:
            self.wishlists.delete(existing)
            self.logger.info("Removed from wishlist", user_id=user_id, template_id=template_id)
            return WishlistToggleDTO(
                action=ACTION_REMOVED, template_id=template_id, is_wishlisted=False
            )
        try:
            with transaction.atomic():
                entry = self.wishlists.create(user_id=user_id, template_id=template.id)
        except IntegrityError:
            # A concurrent request added the same row first
            entry = self.wishlists.find(user_id, template_id)
        self.logger.info("Added to wishlist", user_id=user_id, template_id=template_id)
        return WishlistToggleDTO(
            action=ACTION_ADDED,
            template_id=template_id,
            is_wishlisted=True,
            wishlist_id=str(entry.id) if entry is not None else None,
        )

    def template_ids(self, user_id) -> List[str]:
        ids = self.wishlists.template_ids_for_user(user_id)
        self.logger.debug("Listing wishlist ids", user_id=user_id, count=len(ids))
        return ids

    def list_entries(self, user_id, *, language: Optional[str] = None) -> List[WishlistEntryDTO]:
        entries = self.wishlists.active_entries_for_user(user_id)
        return WishlistMapper.many_to_dto(entries, language=language)

    def is_wishlisted(self, user_id, template_id) -> bool:
        return self.wishlists.find(user_id, template_id) is not None

    def remove(self, user_id, template_id) -> None:
        entry = self.wishlists.find(user_id, template_id)
        if entry is None:
            raise ApplicationError(
                "NOT_FOUND",
                Messages.WISHLIST_MISSING,
                status_code=status.HTTP_404_NOT_FOUND,
            )
        self.wishlists.delete(entry)
        self.logger.info("Removed from wishlist", user_id=user_id, template_id=str(template_id))

    def clear(self, user_id) -> int:
        count = self.wishlists.clear_for_user(user_id)
        self.logger.info("Cleared wishlist", user_id=user_id, deleted=count)
        return count
