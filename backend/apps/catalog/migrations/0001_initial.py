import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Template",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name_ar", models.CharField(max_length=255)),
                ("name_en", models.CharField(blank=True, default="", max_length=255)),
                ("slug", models.SlugField(allow_unicode=True, max_length=255, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("discount_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("thumbnail_url", models.TextField(blank=True, default="")),
                ("type", models.CharField(choices=[("ready", "Ready"), ("interactive", "Interactive")], default="ready", max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("downloads_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "templates",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["is_active", "type"], name="template_active_type_idx")],
            },
        ),
    ]
