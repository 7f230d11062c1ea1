import uuid
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Coupon",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=50, unique=True)),
                ("description_ar", models.CharField(blank=True, max_length=255, null=True)),
                ("description_en", models.CharField(blank=True, max_length=255, null=True)),
                ("discount_type", models.CharField(choices=[("percentage", "Percentage"), ("fixed", "Fixed")], default="percentage", max_length=20)),
                ("discount_value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("max_discount", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("min_order_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10)),
                ("max_uses", models.PositiveIntegerField(blank=True, null=True)),
                ("used_count", models.PositiveIntegerField(default=0)),
                ("max_uses_per_user", models.PositiveIntegerField(blank=True, null=True)),
                ("starts_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "coupons",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["is_active"], name="coupon_active_idx"),
                    models.Index(fields=["starts_at", "expires_at"], name="coupon_validity_idx"),
                ],
            },
        ),
    ]
