import types
import unittest
import uuid
from decimal import Decimal

from apps.catalog.services import TemplateService


class FakeCache:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, timeout=None):
        self.store[key] = value


def make_template(slug="cert", price="30.00", discount_price=None, type_="ready", **extra):
    fields = dict(
        id=uuid.uuid4(),
        name_ar="شهادة شكر",
        name_en="Thank-you certificate",
        slug=slug,
        description="",
        price=Decimal(price),
        discount_price=Decimal(discount_price) if discount_price else None,
        thumbnail_url="",
        type=type_,
        is_active=True,
        downloads_count=0,
    )
    fields.update(extra)
    template = types.SimpleNamespace(**fields)
    dp = template.discount_price
    template.effective_price = dp if dp is not None and dp < template.price else template.price
    return template


class FakeTemplateRepository:
    def __init__(self, templates):
        self.templates = list(templates)
        self.list_calls = 0

    def list_active(self, template_type=None):
        self.list_calls += 1
        return [
            t for t in self.templates
            if t.is_active and (template_type is None or t.type == template_type)
        ]

    def find_by_identifier(self, identifier):
        for t in self.templates:
            if t.is_active and identifier in (str(t.id), t.slug):
                return t
        return None

    def get_active(self, template_id):
        return self.find_by_identifier(str(template_id))

    def increment_downloads(self, template_ids):
        return 0


class TemplateServiceTests(unittest.TestCase):
    def setUp(self):
        self.cert = make_template("cert", "30.00", "20.00")
        self.plan = make_template("plan", "50.00", type_="interactive")
        self.hidden = make_template("hidden", is_active=False)
        self.repo = FakeTemplateRepository([self.cert, self.plan, self.hidden])
        self.cache = FakeCache()
        self.service = TemplateService(self.repo, self.cache)

    def test_list_filters_by_type_and_skips_inactive(self):
        everything = self.service.list_templates(language="ar")
        self.assertEqual({t.slug for t in everything}, {"cert", "plan"})
        interactive = self.service.list_templates("Interactive ", language="ar")
        self.assertEqual([t.slug for t in interactive], ["plan"])

    def test_unknown_type_lists_everything(self):
        self.assertEqual(self.service.normalize_type("pdf"), None)
        self.assertEqual(len(self.service.list_templates("pdf")), 2)

    def test_list_is_cached_per_language(self):
        first = self.service.list_templates(language="ar")
        again = self.service.list_templates(language="ar")
        self.assertIs(first, again)
        self.assertEqual(self.repo.list_calls, 1)

        english = self.service.list_templates(language="en")
        self.assertEqual(self.repo.list_calls, 2)
        self.assertEqual(english[0].name, "Thank-you certificate")
        self.assertEqual(first[0].name, "شهادة شكر")

    def test_invalidate_bumps_version(self):
        self.service.list_templates()
        self.service.invalidate_list_cache()
        self.service.list_templates()
        self.assertEqual(self.repo.list_calls, 2)
        self.assertEqual(self.cache.get("templates:list:version"), 2)

    def test_disabled_cache_always_hits_repository(self):
        service = TemplateService(self.repo, self.cache, disable_cache=True)
        service.list_templates()
        service.list_templates()
        self.assertEqual(self.repo.list_calls, 2)
        self.assertEqual(self.cache.store, {})

    def test_get_template_by_slug_or_id(self):
        by_slug = self.service.get_template("cert")
        by_id = self.service.get_template(str(self.cert.id))
        self.assertEqual(by_slug.id, str(self.cert.id))
        self.assertEqual(by_id.slug, "cert")
        self.assertEqual(by_slug.effective_price, Decimal("20.00"))

    def test_get_template_missing_or_inactive(self):
        self.assertIsNone(self.service.get_template("nope"))
        self.assertIsNone(self.service.get_template("hidden"))
