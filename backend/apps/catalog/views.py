from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from apps.api.exceptions import ApplicationError
from apps.api.pagination import EnvelopePagination
from apps.api.schemas import ErrorResponseSerializer, envelope, paginated_envelope
from apps.api.utils import success_response
from apps.common import get_logger
from apps.common.i18n import Messages, resolve_language

from .container import build_template_service
from .serializers import TemplateReadSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Templates"])
class TemplateListView(APIView):
    permission_classes = [AllowAny]
    service = build_template_service()
    log = logger.bind(view="TemplateListView")

    @extend_schema(
        operation_id="templates_list",
        summary="List active templates",
        description="Paginated via ?page and ?limit. Cached results may be served.",
        parameters=[
            OpenApiParameter(
                name="type",
                description="Filter by template type (ready or interactive)",
                required=False,
                type=str,
            )
        ],
        responses={200: paginated_envelope(TemplateReadSerializer)},
    )
    def get(self, request):
        template_type = request.query_params.get("type")
        self.log.debug("Handling template list request", type=template_type)
        items = self.service.list_templates(
            template_type, language=resolve_language(request)
        )
        paginator = EnvelopePagination()
        page = paginator.paginate_queryset(items, request, view=self)
        data = TemplateReadSerializer(page, many=True).data
        return paginator.get_paginated_response(data)


@extend_schema(tags=["Templates"])
class TemplateDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_template_service()
    log = logger.bind(view="TemplateDetailView")

    @extend_schema(
        operation_id="templates_retrieve",
        summary="Get template by id or slug",
        parameters=[OpenApiParameter("identifier", str, OpenApiParameter.PATH)],
        responses={
            200: envelope(TemplateReadSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, identifier: str):
        dto = self.service.get_template(identifier, language=resolve_language(request))
        if dto is None:
            raise ApplicationError("NOT_FOUND", Messages.TEMPLATE_NOT_FOUND)
        return success_response(TemplateReadSerializer(dto).data)
