from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.catalog.models import Template
from apps.common.management.commands.seed_templatestore import COUPONS, TEMPLATES
from apps.coupons.models import Coupon
from apps.users.models import User


class SeedCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_templatestore", stdout=StringIO())
        call_command("seed_templatestore", stdout=StringIO())
        self.assertEqual(Template.objects.count(), len(TEMPLATES))
        self.assertEqual(Coupon.objects.count(), len(COUPONS))
        admin = User.objects.get(username="admin")
        self.assertTrue(admin.is_staff and admin.is_superuser)
        self.assertTrue(User.objects.get(username="teacher").check_password("TeacherPass123!"))

    def test_flush_removes_extra_rows(self):
        Template.objects.create(name_ar="قديم", slug="old", price="1.00")
        call_command("seed_templatestore", "--flush", stdout=StringIO())
        self.assertFalse(Template.objects.filter(slug="old").exists())
