import asyncio
from collections import deque

from storefront.exceptions import ApiError, NotAuthenticatedError


class FakeApi:
    """Scripted stand-in for StorefrontApi.

    Each endpoint pops the next queued reply: a dict is returned, an exception
    is raised, and an ``asyncio.Future`` is awaited first.
    """

    def __init__(self, authenticated=True):
        self.authenticated = authenticated
        self.replies = {}
        self.calls = []

    @property
    def is_authenticated(self):
        return self.authenticated

    def queue(self, endpoint, *replies):
        self.replies.setdefault(endpoint, deque()).extend(replies)

    async def _reply(self, endpoint, *args, **kwargs):
        self.calls.append((endpoint, args, kwargs))
        reply = self.replies[endpoint].popleft()
        if isinstance(reply, asyncio.Future):
            reply = await reply
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def validate_coupon(self, code, order_total):
        return await self._reply("validate_coupon", code, order_total)

    async def toggle_wishlist(self, template_id):
        return await self._reply("toggle_wishlist", template_id)

    async def get_wishlist_ids(self):
        return await self._reply("get_wishlist_ids")

    async def create_order(self, items, *, coupon_code=None):
        return await self._reply("create_order", list(items), coupon_code=coupon_code)

    async def pay_order(self, order_id):
        return await self._reply("pay_order", order_id)


def toggled(action):
    return {
        "success": True,
        "message": "",
        "data": {"action": action, "is_wishlisted": action == "added"},
    }


def network_error():
    return ApiError("connection refused")


def unauthenticated():
    return NotAuthenticatedError("Not authenticated", status_code=401)
