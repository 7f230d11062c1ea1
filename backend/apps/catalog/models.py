import uuid
from decimal import Decimal

from django.db import models


class TemplateType(models.TextChoices):
    READY = "ready", "Ready"
    INTERACTIVE = "interactive", "Interactive"


class Template(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name_ar = models.CharField(max_length=255)
    name_en = models.CharField(max_length=255, blank=True, default="")
    slug = models.SlugField(max_length=255, unique=True, allow_unicode=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    thumbnail_url = models.TextField(blank=True, default="")
    type = models.CharField(
        max_length=20, choices=TemplateType.choices, default=TemplateType.READY
    )
    is_active = models.BooleanField(default=True)
    downloads_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "templates"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "type"], name="template_active_type_idx"),
        ]

    def __str__(self):
        return self.name_ar

    @property
    def effective_price(self) -> Decimal:
        """Price a buyer pays right now: the discount price when it undercuts ``price``."""
        if self.discount_price is not None and self.discount_price < self.price:
            return self.discount_price
        return self.price
