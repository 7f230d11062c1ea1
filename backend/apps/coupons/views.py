from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.views import APIView

from apps.api.pagination import EnvelopePagination
from apps.api.schemas import ErrorResponseSerializer, envelope, paginated_envelope
from apps.api.utils import success_response
from apps.common import get_logger
from apps.common.i18n import Messages, resolve_language

from .container import build_coupon_service
from .serializers import (
    CouponSerializer,
    CouponValidateRequestSerializer,
    CouponValidationSerializer,
    CouponWriteSerializer,
)

logger = get_logger(__name__).bind(component="coupons", layer="view")


@extend_schema(tags=["Coupons"])
class CouponValidateView(APIView):
    permission_classes = [AllowAny]
    service = build_coupon_service()
    log = logger.bind(view="CouponValidateView")

    @extend_schema(
        operation_id="coupons_validate",
        summary="Validate a coupon code against an order total",
        description=(
            "Public. When the caller is authenticated the per-user usage limit "
            "is checked as well."
        ),
        request=CouponValidateRequestSerializer,
        responses={
            200: envelope(CouponValidationSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CouponValidateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = getattr(request, "user", None)
        user_id = user.pk if user is not None and user.is_authenticated else None
        self.log.debug("Validating coupon", user_id=user_id)
        result = self.service.validate_coupon(
            serializer.validated_data["code"],
            serializer.validated_data["order_total"],
            user_id=user_id,
            language=resolve_language(request),
        )
        return success_response(
            CouponValidationSerializer(result).data, message=Messages.COUPON_VALID
        )


@extend_schema(tags=["Admin: Coupons"])
class AdminCouponListView(APIView):
    permission_classes = [IsAdminUser]
    service = build_coupon_service()
    log = logger.bind(view="AdminCouponListView")

    @extend_schema(
        operation_id="admin_coupons_list",
        summary="List coupons, newest first",
        parameters=[
            OpenApiParameter(
                name="active",
                description="Only active coupons when truthy",
                required=False,
                type=bool,
            )
        ],
        responses={200: paginated_envelope(CouponSerializer)},
    )
    def get(self, request):
        active = str(request.query_params.get("active", "")).lower()
        items = self.service.list_coupons(active_only=active in {"1", "true", "yes"})
        paginator = EnvelopePagination()
        page = paginator.paginate_queryset(items, request, view=self)
        return paginator.get_paginated_response(CouponSerializer(page, many=True).data)

    @extend_schema(
        operation_id="admin_coupons_create",
        summary="Create coupon",
        request=CouponWriteSerializer,
        responses={
            201: envelope(CouponSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            422: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CouponWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.create_coupon(serializer.validated_data)
        self.log.info("Coupon created via API", coupon_id=dto.id, code=dto.code)
        return success_response(
            CouponSerializer(dto).data,
            message=Messages.COUPON_CREATED,
            http_status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Admin: Coupons"])
class AdminCouponDetailView(APIView):
    permission_classes = [IsAdminUser]
    service = build_coupon_service()
    log = logger.bind(view="AdminCouponDetailView")

    @extend_schema(
        operation_id="admin_coupons_update",
        summary="Update coupon",
        description="Only the supplied fields change.",
        request=CouponWriteSerializer,
        responses={
            200: envelope(CouponSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            422: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, coupon_id: str):
        serializer = CouponWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.log.info("Updating coupon via API", coupon_id=coupon_id)
        dto = self.service.update_coupon(coupon_id, serializer.validated_data)
        return success_response(CouponSerializer(dto).data, message=Messages.COUPON_UPDATED)

    @extend_schema(
        operation_id="admin_coupons_delete",
        summary="Delete coupon",
        responses={200: None, 404: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def delete(self, request, coupon_id: str):
        self.log.info("Deleting coupon via API", coupon_id=coupon_id)
        self.service.delete_coupon(coupon_id)
        return success_response(message=Messages.COUPON_DELETED)
