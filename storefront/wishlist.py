from __future__ import annotations

import itertools
from typing import Dict, Iterable, List, Optional, Set

from apps.common import get_logger

from . import messages
from .api import StorefrontApi
from .exceptions import ApiError, NotAuthenticatedError
from .notifications import Notifier
from .persistence import WISHLIST_STORAGE_KEY, Storage, load_state, save_state

logger = get_logger(__name__).bind(component="storefront", layer="wishlist")

ACTION_ADDED = "added"


class WishlistStore:
    """
    Set of wishlisted template ids with optimistic toggles.

    A toggle flips membership immediately and is settled by the server reply.
    Each toggle takes a request token; only the newest unsettled token of a
    template decides what is shown. Replies to older tokens just move the
    server-truth baseline that a failed newer toggle falls back to.
    """

    def __init__(self, api: StorefrontApi, notifier: Notifier, storage: Optional[Storage] = None):
        self.api = api
        self.notifier = notifier
        self.storage = storage
        self.template_ids: Set[str] = set()
        self.is_loading = False
        self._tokens = itertools.count(1)
        self._pending: Dict[str, int] = {}
        self._inflight: Dict[str, int] = {}
        self._confirmed: Dict[str, bool] = {}
        self._confirmed_token: Dict[str, int] = {}
        self.log = logger.bind(store="WishlistStore")

    # Persistence
    def load(self) -> None:
        if self.storage is None:
            return
        state = load_state(self.storage, WISHLIST_STORAGE_KEY) or {}
        self.template_ids = {str(i) for i in state.get("template_ids") or []}

    def _persist(self) -> None:
        if self.storage is None:
            return
        save_state(self.storage, WISHLIST_STORAGE_KEY, {"template_ids": sorted(self.template_ids)})

    def _set(self, template_id: str, wishlisted: bool) -> None:
        if wishlisted:
            self.template_ids.add(template_id)
        else:
            self.template_ids.discard(template_id)
        self._persist()

    # Queries
    def is_wishlisted(self, template_id: str) -> bool:
        return str(template_id) in self.template_ids

    def is_pending(self, template_id: str) -> bool:
        return str(template_id) in self._pending

    @property
    def count(self) -> int:
        return len(self.template_ids)

    # Toggle phases
    def begin_toggle(self, template_id: str) -> int:
        """Flip membership locally and return the token for this request."""
        was = self.is_wishlisted(template_id)
        if not self._inflight.get(template_id):
            self._confirmed[template_id] = was
            self._confirmed_token[template_id] = 0
        token = next(self._tokens)
        self._pending[template_id] = token
        self._inflight[template_id] = self._inflight.get(template_id, 0) + 1
        self._set(template_id, not was)
        self.log.debug("Optimistic toggle", template_id=template_id, token=token, wishlisted=not was)
        return token

    def settle_success(self, template_id: str, token: int, wishlisted: bool) -> bool:
        try:
            newer_baseline = token > self._confirmed_token.get(template_id, 0)
            if newer_baseline:
                self._confirmed[template_id] = wishlisted
                self._confirmed_token[template_id] = token
            if self._pending.get(template_id) == token:
                del self._pending[template_id]
                self._set(template_id, wishlisted)
                return True
            if template_id not in self._pending and newer_baseline:
                # Newest toggle already settled by failure; converge on server truth
                self._set(template_id, wishlisted)
            else:
                self.log.debug("Stale toggle reply ignored", template_id=template_id, token=token)
            return False
        finally:
            self._release(template_id)

    def settle_failure(self, template_id: str, token: int) -> bool:
        try:
            if self._pending.get(template_id) != token:
                self.log.debug("Stale toggle failure ignored", template_id=template_id, token=token)
                return False
            del self._pending[template_id]
            self._set(template_id, self._confirmed.get(template_id, False))
            return True
        finally:
            self._release(template_id)

    def _release(self, template_id: str) -> None:
        remaining = self._inflight.get(template_id, 1) - 1
        if remaining > 0:
            self._inflight[template_id] = remaining
            return
        self._inflight.pop(template_id, None)
        self._confirmed.pop(template_id, None)
        self._confirmed_token.pop(template_id, None)

    async def toggle_wishlist(self, template_id: str) -> bool:
        """Toggle ``template_id`` and return the membership shown afterwards."""
        template_id = str(template_id)
        token = self.begin_toggle(template_id)
        try:
            payload = await self.api.toggle_wishlist(template_id)
        except NotAuthenticatedError:
            if self.settle_failure(template_id, token):
                self.notifier.redirect(messages.LOGIN_PATH)
            return self.is_wishlisted(template_id)
        except ApiError as exc:
            self.log.warning("Wishlist toggle failed", template_id=template_id, error=exc.message)
            if self.settle_failure(template_id, token):
                self.notifier.error(messages.GENERIC_RETRY)
            return self.is_wishlisted(template_id)

        data = payload.get("data") or {}
        if not payload.get("success"):
            self.log.info("Wishlist toggle rejected", template_id=template_id)
            if self.settle_failure(template_id, token):
                self.notifier.error(payload.get("message") or messages.GENERIC_RETRY)
            return self.is_wishlisted(template_id)

        action = data.get("action")
        wishlisted = bool(data.get("is_wishlisted", action == ACTION_ADDED))
        if self.settle_success(template_id, token, wishlisted):
            self.notifier.success(
                messages.WISHLIST_ADDED if action == ACTION_ADDED else messages.WISHLIST_REMOVED
            )
        return self.is_wishlisted(template_id)

    # Bulk
    def replace(self, template_ids: Iterable[str]) -> None:
        self.template_ids = {str(i) for i in template_ids}
        self._persist()

    async def fetch_wishlist_ids(self) -> bool:
        """Replace local membership with the server's list."""
        self.is_loading = True
        try:
            payload = await self.api.get_wishlist_ids()
        except NotAuthenticatedError:
            self.log.info("Session rejected while fetching wishlist ids")
            self.notifier.redirect(messages.LOGIN_PATH)
            return False
        except ApiError as exc:
            self.log.warning("Fetching wishlist ids failed", error=exc.message)
            return False
        finally:
            self.is_loading = False
        if not payload.get("success"):
            self.log.info("Wishlist ids request rejected", server_message=payload.get("message"))
            return False
        ids: List[str] = list(payload.get("data") or [])
        self.replace(ids)
        self.log.debug("Wishlist ids loaded", count=len(ids))
        return True

    def clear_wishlist(self) -> None:
        self.replace(())
