import logging
import unittest
from decimal import Decimal

from apps.common.logger import AppLogger, get_logger, render


class RenderTests(unittest.TestCase):
    def test_plain_message_without_context(self):
        self.assertEqual(render("Cart cleared", {}), "Cart cleared")

    def test_context_is_rendered_as_pairs(self):
        text = render("Item added", {"user_id": 3, "total": Decimal("35.00"), "size": None})
        self.assertEqual(text, "Item added | user_id=3 total=35.00 size=None")

    def test_non_scalar_values_use_repr(self):
        self.assertEqual(render("x", {"ids": [1, 2]}), "x | ids=[1, 2]")


class AppLoggerTests(unittest.TestCase):
    def test_bind_layers_context_without_mutating_parent(self):
        base = get_logger("apps.tests.logger").bind(component="carts")
        child = base.bind(layer="service")
        self.assertEqual(base.context, {"component": "carts"})
        self.assertEqual(child.context, {"component": "carts", "layer": "service"})
        self.assertEqual(child.name, "apps.tests.logger")

    def test_records_carry_message_and_context(self):
        log = get_logger("apps.tests.logger").bind(component="orders")
        with self.assertLogs("apps.tests.logger", level="INFO") as captured:
            log.info("Order placed", order_id=5)
        record = captured.records[0]
        self.assertEqual(record.getMessage(), "Order placed | component=orders order_id=5")
        self.assertEqual(record.context, {"component": "orders", "order_id": 5})

    def test_exception_includes_traceback(self):
        log = AppLogger(logging.getLogger("apps.tests.logger"))
        with self.assertLogs("apps.tests.logger", level="ERROR") as captured:
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                log.exception("Cart clear after checkout failed")
        self.assertIsNotNone(captured.records[0].exc_info)

    def test_disabled_levels_are_skipped(self):
        inner = logging.getLogger("apps.tests.quiet")
        inner.setLevel(logging.WARNING)
        self.addCleanup(inner.setLevel, logging.NOTSET)
        with self.assertLogs("apps.tests.quiet", level="WARNING") as captured:
            AppLogger(inner).debug("hidden")
            AppLogger(inner).warning("shown")
        self.assertEqual([r.getMessage() for r in captured.records], ["shown"])
