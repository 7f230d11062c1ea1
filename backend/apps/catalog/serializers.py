from rest_framework import serializers


class TemplateReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    discount_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, coerce_to_string=False, allow_null=True
    )
    effective_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, coerce_to_string=False
    )
    thumbnail_url = serializers.CharField(allow_blank=True)
    type = serializers.CharField()
    downloads_count = serializers.IntegerField()
