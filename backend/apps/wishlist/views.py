from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, envelope
from apps.api.utils import success_response
from apps.common import get_logger
from apps.common.i18n import Messages, resolve_language

from .container import build_wishlist_service
from .serializers import (
    WishlistCheckSerializer,
    WishlistClearSerializer,
    WishlistEntrySerializer,
    WishlistToggleSerializer,
)
from .services import ACTION_ADDED

logger = get_logger(__name__).bind(component="wishlist", layer="view")

TEMPLATE_ID_PARAM = OpenApiParameter("template_id", str, OpenApiParameter.PATH)


@extend_schema(tags=["Wishlist"])
class WishlistView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistView")

    @extend_schema(
        operation_id="wishlist_list",
        summary="List wishlist entries with their templates",
        description="Entries whose template is no longer active are omitted.",
        responses={200: envelope(WishlistEntrySerializer, many=True)},
    )
    def get(self, request):
        entries = self.service.list_entries(
            request.user.id, language=resolve_language(request)
        )
        return success_response(WishlistEntrySerializer(entries, many=True).data)

    @extend_schema(
        operation_id="wishlist_clear",
        summary="Remove every wishlist entry",
        responses={200: envelope(WishlistClearSerializer)},
    )
    def delete(self, request):
        count = self.service.clear(request.user.id)
        self.log.info("Wishlist cleared via API", user_id=request.user.id, deleted=count)
        return success_response(
            {"deleted_count": count},
            message=Messages.WISHLIST_CLEARED.format(count=count),
        )


@extend_schema(tags=["Wishlist"])
class WishlistIdsView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()

    @extend_schema(
        operation_id="wishlist_ids",
        summary="Template ids on the caller's wishlist",
        responses={200: envelope(serializers.ListField(child=serializers.CharField()), name="WishlistIdsEnvelope")},
    )
    def get(self, request):
        return success_response(self.service.template_ids(request.user.id))


@extend_schema(tags=["Wishlist"])
class WishlistToggleView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistToggleView")

    @extend_schema(
        operation_id="wishlist_toggle",
        summary="Add or remove a template",
        description="201 when the template was added, 200 when it was removed.",
        parameters=[TEMPLATE_ID_PARAM],
        request=None,
        responses={
            200: envelope(WishlistToggleSerializer),
            201: envelope(WishlistToggleSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, template_id: str):
        result = self.service.toggle(request.user.id, template_id)
        added = result.action == ACTION_ADDED
        self.log.debug(
            "Wishlist toggled", user_id=request.user.id, template_id=template_id, action=result.action
        )
        return success_response(
            WishlistToggleSerializer(result).data,
            message=Messages.WISHLIST_ADDED if added else Messages.WISHLIST_REMOVED,
            http_status=status.HTTP_201_CREATED if added else status.HTTP_200_OK,
        )


@extend_schema(tags=["Wishlist"])
class WishlistCheckView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()

    @extend_schema(
        operation_id="wishlist_check",
        summary="Is a template on the caller's wishlist",
        parameters=[TEMPLATE_ID_PARAM],
        responses={200: envelope(WishlistCheckSerializer)},
    )
    def get(self, request, template_id: str):
        data = {
            "template_id": template_id,
            "is_wishlisted": self.service.is_wishlisted(request.user.id, template_id),
        }
        return success_response(WishlistCheckSerializer(data).data)


@extend_schema(tags=["Wishlist"])
class WishlistItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistItemView")

    @extend_schema(
        operation_id="wishlist_remove",
        summary="Remove a template from the wishlist",
        parameters=[TEMPLATE_ID_PARAM],
        responses={200: None, 404: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def delete(self, request, template_id: str):
        self.service.remove(request.user.id, template_id)
        return success_response(message=Messages.WISHLIST_REMOVED)
