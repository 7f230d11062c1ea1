from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.api.pagination import EnvelopePagination
from apps.api.schemas import ErrorResponseSerializer, envelope, paginated_envelope
from apps.api.utils import success_response
from apps.common import get_logger
from apps.common.i18n import Messages

from .container import build_order_service
from .serializers import OrderCreateSerializer, OrderPaySerializer, OrderSerializer
from .services import SIMULATED_PAYMENT_METHOD

logger = get_logger(__name__).bind(component="orders", layer="view")

ORDER_ID_PARAM = OpenApiParameter("order_id", str, OpenApiParameter.PATH)


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        operation_id="orders_list",
        summary="List the caller's orders, newest first",
        responses={200: paginated_envelope(OrderSerializer)},
    )
    def get(self, request):
        return self.service.list_orders_paginated(
            request,
            request.user.id,
            paginator_class=EnvelopePagination,
            serializer_class=OrderSerializer,
            view=self,
        )

    @extend_schema(
        operation_id="orders_create",
        summary="Create a pending order from cart items",
        description="Prices are taken server-side. An optional coupon is re-validated.",
        request=OrderCreateSerializer,
        responses={
            201: envelope(OrderSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Creating order via API",
            user_id=request.user.id,
            items=len(serializer.validated_data["items"]),
        )
        dto = self.service.create_order(request.user.id, serializer.validated_data)
        return success_response(
            OrderSerializer(dto).data,
            message=Messages.ORDER_CREATED,
            http_status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get one of the caller's orders",
        parameters=[ORDER_ID_PARAM],
        responses={200: envelope(OrderSerializer), 404: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def get(self, request, order_id: str):
        dto = self.service.get_order(request.user.id, order_id)
        return success_response(OrderSerializer(dto).data)


@extend_schema(tags=["Orders"])
class OrderPayView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderPayView")

    @extend_schema(
        operation_id="orders_pay",
        summary="Confirm payment for a pending order",
        description="Simulated payment. Only the owner may pay and only while the order is pending.",
        parameters=[ORDER_ID_PARAM],
        request=OrderPaySerializer,
        responses={
            200: envelope(OrderSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, order_id: str):
        serializer = OrderPaySerializer(data=request.data or {})
        serializer.is_valid(raise_exception=True)
        self.log.info("Paying order via API", user_id=request.user.id, order_id=order_id)
        dto = self.service.pay_order(
            request.user.id,
            order_id,
            payment_method=serializer.validated_data.get("payment_method") or SIMULATED_PAYMENT_METHOD,
        )
        return success_response(OrderSerializer(dto).data, message=Messages.ORDER_PAID)
