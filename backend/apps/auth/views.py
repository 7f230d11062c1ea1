from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer, envelope
from apps.api.utils import success_response
from apps.common import get_logger
from .serializers import MeResponseSerializer, TokenPairSerializer

logger = get_logger(__name__).bind(component="auth", layer="view")


class EnvelopeTokenMixin:
    """Wrap simplejwt token payloads in the success envelope."""

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        return success_response(response.data, http_status=response.status_code)


@extend_schema(
    tags=["Auth"],
    summary="Login (JWT obtain pair)",
    responses={
        200: envelope(TokenPairSerializer),
        401: OpenApiResponse(response=ErrorResponseSerializer),
    },
)
class LoginView(EnvelopeTokenMixin, TokenObtainPairView):
    permission_classes = [AllowAny]


@extend_schema(
    tags=["Auth"],
    summary="Refresh JWT",
    responses={
        200: envelope(TokenPairSerializer),
        401: OpenApiResponse(response=ErrorResponseSerializer),
    },
)
class RefreshView(EnvelopeTokenMixin, TokenRefreshView):
    permission_classes = [AllowAny]


@extend_schema(
    tags=["Auth"],
    summary="Get current user",
    responses={
        200: envelope(MeResponseSerializer),
        401: OpenApiResponse(response=ErrorResponseSerializer),
    },
)
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    log = logger.bind(view="MeView")

    def get(self, request):
        user = request.user
        self.log.debug("Returning current user profile", user_id=user.id)
        payload = {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone": getattr(user, "phone", None),
            "is_staff": bool(user.is_staff or user.is_superuser),
        }
        return success_response(MeResponseSerializer(payload).data)
