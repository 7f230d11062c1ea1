import uuid

from django.conf import settings
from django.db import models


class Wishlist(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="wishlist"
    )
    template = models.ForeignKey(
        "catalog.Template", on_delete=models.CASCADE, related_name="wishlisted_by"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "wishlists"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "template"], name="unique_wishlist_user_template"
            )
        ]
