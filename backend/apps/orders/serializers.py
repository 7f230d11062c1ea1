from rest_framework import serializers


class OrderItemInputSerializer(serializers.Serializer):
    template_id = serializers.UUIDField(format="hex_verbose")


class OrderCreateSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True)
    coupon_code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("At least one item is required.")
        return [{"template_id": str(item["template_id"])} for item in value]


class OrderPaySerializer(serializers.Serializer):
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True)


class OrderItemSerializer(serializers.Serializer):
    template_id = serializers.CharField(allow_null=True)
    template_name = serializers.CharField()
    template_type = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)


class OrderSerializer(serializers.Serializer):
    id = serializers.CharField()
    order_number = serializers.CharField()
    status = serializers.CharField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    coupon_code = serializers.CharField(allow_null=True)
    payment_method = serializers.CharField(allow_blank=True)
    payment_id = serializers.CharField(allow_blank=True)
    paid_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    items = OrderItemSerializer(many=True)
