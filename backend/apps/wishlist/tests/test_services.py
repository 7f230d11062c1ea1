import types
import unittest
import uuid
from unittest.mock import patch

from apps.api.exceptions import ApplicationError
from apps.common.i18n import Messages
from apps.wishlist.services import ACTION_ADDED, ACTION_REMOVED, WishlistService


class DummyAtomic:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeTemplates:
    def __init__(self, *active_ids):
        self.active = {str(i) for i in active_ids}

    def get_active(self, template_id):
        if str(template_id) in self.active:
            return types.SimpleNamespace(id=uuid.UUID(str(template_id)))
        return None


class FakeWishlistRepository:
    def __init__(self):
        self.rows = []

    def find(self, user_id, template_id):
        for row in self.rows:
            if row.user_id == user_id and str(row.template_id) == str(template_id):
                return row
        return None

    def create(self, **data):
        row = types.SimpleNamespace(id=uuid.uuid4(), **data)
        self.rows.append(row)
        return row

    def delete(self, row):
        self.rows.remove(row)

    def template_ids_for_user(self, user_id):
        return [str(r.template_id) for r in self.rows if r.user_id == user_id]

    def clear_for_user(self, user_id):
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.user_id != user_id]
        return before - len(self.rows)


class WishlistServiceTests(unittest.TestCase):
    def setUp(self):
        self.template_id = str(uuid.uuid4())
        self.repo = FakeWishlistRepository()
        self.service = WishlistService(self.repo, FakeTemplates(self.template_id))
        patcher = patch("apps.wishlist.services.transaction.atomic", return_value=DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_toggle_adds_then_removes(self):
        added = self.service.toggle(1, self.template_id)
        self.assertEqual(added.action, ACTION_ADDED)
        self.assertTrue(added.is_wishlisted)
        self.assertIsNotNone(added.wishlist_id)
        self.assertEqual(self.service.template_ids(1), [self.template_id])

        removed = self.service.toggle(1, self.template_id)
        self.assertEqual(removed.action, ACTION_REMOVED)
        self.assertFalse(removed.is_wishlisted)
        self.assertEqual(self.service.template_ids(1), [])

    def test_toggle_unknown_template_is_404(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.toggle(1, str(uuid.uuid4()))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, Messages.TEMPLATE_UNAVAILABLE)

    def test_users_are_isolated(self):
        self.service.toggle(1, self.template_id)
        self.assertTrue(self.service.is_wishlisted(1, self.template_id))
        self.assertFalse(self.service.is_wishlisted(2, self.template_id))

    def test_remove_missing_entry_is_404(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.remove(1, self.template_id)
        self.assertEqual(ctx.exception.message, Messages.WISHLIST_MISSING)

    def test_clear_returns_deleted_count(self):
        self.service.toggle(1, self.template_id)
        self.service.toggle(2, self.template_id)
        self.assertEqual(self.service.clear(1), 1)
        self.assertEqual(self.service.template_ids(2), [self.template_id])
