import unittest
from decimal import Decimal

from apps.coupons.models import Coupon, DiscountType


def coupon(**overrides):
    fields = dict(
        code="WELCOME10",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=Decimal("10"),
        min_order_amount=Decimal("0"),
    )
    fields.update(overrides)
    return Coupon(**fields)


class CouponDiscountTests(unittest.TestCase):
    def test_percentage_of_total(self):
        self.assertEqual(coupon().calculate_discount(Decimal("150")), Decimal("15.00"))

    def test_percentage_capped_by_max_discount(self):
        c = coupon(discount_value=Decimal("50"), max_discount=Decimal("40"))
        self.assertEqual(c.calculate_discount(Decimal("200")), Decimal("40.00"))

    def test_percentage_rounds_half_up(self):
        c = coupon(discount_value=Decimal("15"))
        # 15% of 33.30 = 4.995
        self.assertEqual(c.calculate_discount(Decimal("33.30")), Decimal("5.00"))

    def test_fixed_never_exceeds_total(self):
        c = coupon(discount_type=DiscountType.FIXED, discount_value=Decimal("20"))
        self.assertEqual(c.calculate_discount(Decimal("100")), Decimal("20.00"))
        self.assertEqual(c.calculate_discount(Decimal("12.50")), Decimal("12.50"))

    def test_zero_below_minimum_order(self):
        c = coupon(min_order_amount=Decimal("100"))
        self.assertFalse(c.applies_to(Decimal("99.99")))
        self.assertEqual(c.calculate_discount(Decimal("99.99")), Decimal("0.00"))
        self.assertTrue(c.applies_to(Decimal("100")))

    def test_formatted_discount(self):
        self.assertEqual(coupon(discount_value=Decimal("10.00")).formatted_discount, "10%")
        self.assertEqual(coupon(discount_value=Decimal("12.50")).formatted_discount, "12.5%")
        fixed = coupon(discount_type=DiscountType.FIXED, discount_value=Decimal("20"))
        self.assertEqual(fixed.formatted_discount, "20.00 ر.س")
