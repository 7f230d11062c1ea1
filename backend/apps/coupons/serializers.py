from rest_framework import serializers

from .models import DiscountType


class CouponValidateRequestSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    order_total = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=0
    )


class PublicCouponSerializer(serializers.Serializer):
    id = serializers.CharField()
    code = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    discount_type = serializers.CharField()
    discount_value = serializers.FloatField()
    formatted_discount = serializers.CharField()
    min_order_amount = serializers.FloatField()
    max_discount = serializers.FloatField(allow_null=True)
    expires_at = serializers.CharField(allow_null=True)


class CouponValidationSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    coupon = PublicCouponSerializer()
    calculated_discount = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False
    )
    new_total = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False
    )


class CouponWriteSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    description_ar = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    description_en = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    discount_type = serializers.ChoiceField(choices=DiscountType.choices)
    discount_value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    max_discount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    min_order_amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    max_uses = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    max_uses_per_user = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    starts_at = serializers.DateTimeField(required=False, allow_null=True)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False, default=True)

    def validate(self, attrs):
        starts_at = attrs.get("starts_at")
        expires_at = attrs.get("expires_at")
        if starts_at and expires_at and expires_at < starts_at:
            raise serializers.ValidationError(
                {"expires_at": ["expires_at must be on or after starts_at."]}
            )
        return attrs


class CouponSerializer(serializers.Serializer):
    id = serializers.CharField()
    code = serializers.CharField()
    description_ar = serializers.CharField(allow_null=True)
    description_en = serializers.CharField(allow_null=True)
    discount_type = serializers.CharField()
    discount_value = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    formatted_discount = serializers.CharField()
    max_discount = serializers.DecimalField(
        max_digits=10, decimal_places=2, coerce_to_string=False, allow_null=True
    )
    min_order_amount = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    max_uses = serializers.IntegerField(allow_null=True)
    used_count = serializers.IntegerField()
    max_uses_per_user = serializers.IntegerField(allow_null=True)
    starts_at = serializers.DateTimeField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)
    is_active = serializers.BooleanField()
