import uuid
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import models

TWO_PLACES = Decimal("0.01")


class DiscountType(models.TextChoices):
    PERCENTAGE = "percentage", "Percentage"
    FIXED = "fixed", "Fixed"


class Coupon(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=50, unique=True)
    description_ar = models.CharField(max_length=255, null=True, blank=True)
    description_en = models.CharField(max_length=255, null=True, blank=True)
    discount_type = models.CharField(
        max_length=20, choices=DiscountType.choices, default=DiscountType.PERCENTAGE
    )
    discount_value = models.DecimalField(max_digits=10, decimal_places=2)
    max_discount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    min_order_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0")
    )
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    used_count = models.PositiveIntegerField(default=0)
    max_uses_per_user = models.PositiveIntegerField(null=True, blank=True)
    starts_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "coupons"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active"], name="coupon_active_idx"),
            models.Index(fields=["starts_at", "expires_at"], name="coupon_validity_idx"),
        ]

    def __str__(self):
        return self.code

    def applies_to(self, order_total: Decimal) -> bool:
        return Decimal(order_total) >= self.min_order_amount

    def calculate_discount(self, order_total: Decimal) -> Decimal:
        """
        Discount for ``order_total``: a capped percentage or a fixed amount
        never exceeding the total. Zero when the minimum order is not met.
        """
        order_total = Decimal(order_total)
        if not self.applies_to(order_total):
            return Decimal("0.00")
        if self.discount_type == DiscountType.PERCENTAGE:
            discount = order_total * Decimal(self.discount_value) / Decimal(100)
            if self.max_discount is not None and discount > self.max_discount:
                discount = Decimal(self.max_discount)
        else:
            discount = min(Decimal(self.discount_value), order_total)
        return discount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    @property
    def formatted_discount(self) -> str:
        value = Decimal(self.discount_value)
        if self.discount_type == DiscountType.PERCENTAGE:
            return f"{value.normalize():f}%"
        currency = getattr(settings, "CURRENCY_LABEL", "ر.س")
        return f"{value:,.2f} {currency}"


class CouponUsage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    coupon = models.ForeignKey(Coupon, on_delete=models.CASCADE, related_name="usages")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="coupon_usages"
    )
    order = models.ForeignKey(
        "orders.Order", on_delete=models.CASCADE, related_name="coupon_usages"
    )
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "coupon_usages"
        indexes = [
            models.Index(fields=["coupon", "user"], name="coupon_user_usage_idx"),
        ]
