import logging
import unittest

from apps.common.logger import AppLogger, get_logger


class AppLoggerTests(unittest.TestCase):
    def test_bind_accumulates_context_without_mutating_parent(self):
        parent = get_logger("apps.tests").bind(component="orders")
        child = parent.bind(layer="service")
        self.assertEqual(parent.context, {"component": "orders"})
        self.assertEqual(child.context, {"component": "orders", "layer": "service"})

    def test_lines_render_key_values(self):
        log = get_logger("apps.tests.render").bind(component="wishlist")
        with self.assertLogs("apps.tests.render", level="INFO") as captured:
            log.info("Added to wishlist", user_id=3, template_id=None)
        self.assertEqual(
            captured.records[0].getMessage(),
            "Added to wishlist | component=wishlist user_id=3 template_id=None",
        )

    def test_disabled_level_is_skipped(self):
        logger = logging.getLogger("apps.tests.quiet")
        logger.setLevel(logging.WARNING)
        log = AppLogger("apps.tests.quiet")
        with self.assertLogs("apps.tests.quiet", level="WARNING") as captured:
            log.debug("hidden")
            log.warning("shown")
        self.assertEqual([r.getMessage() for r in captured.records], ["shown"])
