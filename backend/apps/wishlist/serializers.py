from rest_framework import serializers

from apps.catalog.serializers import TemplateReadSerializer


class WishlistToggleSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["added", "removed"])
    template_id = serializers.CharField()
    is_wishlisted = serializers.BooleanField()
    wishlist_id = serializers.CharField(required=False, allow_null=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get("wishlist_id") is None:
            data.pop("wishlist_id", None)
        return data


class WishlistEntrySerializer(serializers.Serializer):
    id = serializers.CharField()
    template_id = serializers.CharField()
    template = TemplateReadSerializer()
    added_at = serializers.DateTimeField()


class WishlistCheckSerializer(serializers.Serializer):
    template_id = serializers.CharField()
    is_wishlisted = serializers.BooleanField()


class WishlistClearSerializer(serializers.Serializer):
    deleted_count = serializers.IntegerField()
