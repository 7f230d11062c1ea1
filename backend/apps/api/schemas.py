from drf_spectacular.utils import inline_serializer
from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)
    hint = serializers.CharField(required=False, allow_blank=True)


class ErrorResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=False)
    message = serializers.CharField()
    error = ErrorDetailSerializer()
    data = serializers.JSONField(required=False)


def envelope(
    data_serializer, *, name: str = None, many: bool = False
) -> serializers.Serializer:
    """Inline schema for ``{"success": true, "message"?: str, "data": <data_serializer>}``."""
    if isinstance(data_serializer, type):
        base_name = data_serializer.__name__
        data_field = data_serializer(many=many)
    else:
        base_name = type(data_serializer).__name__
        data_field = data_serializer
    return inline_serializer(
        name=name or f"{base_name}{'List' if many else ''}Envelope",
        fields={
            "success": serializers.BooleanField(),
            "message": serializers.CharField(required=False),
            "data": data_field,
        },
    )


def paginated_envelope(item_serializer_class: type) -> serializers.Serializer:
    """Envelope whose ``data`` is a list and ``meta`` carries page numbers."""
    name = getattr(item_serializer_class, "__name__", "Items")
    return inline_serializer(
        name=f"Paginated{name}Envelope",
        fields={
            "success": serializers.BooleanField(),
            "data": item_serializer_class(many=True),
            "meta": inline_serializer(
                name=f"Paginated{name}Meta",
                fields={
                    "current_page": serializers.IntegerField(),
                    "last_page": serializers.IntegerField(),
                    "per_page": serializers.IntegerField(),
                    "total": serializers.IntegerField(),
                },
            ),
        },
    )
