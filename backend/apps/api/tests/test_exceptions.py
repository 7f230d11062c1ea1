from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import ApplicationError, global_exception_handler
from apps.common.i18n import Messages

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_envelope():
    request = factory.post("/api/orders/abc/pay")
    exc = ApplicationError(
        "CONFLICT",
        Messages.ORDER_NOT_PENDING,
        status_code=status.HTTP_409_CONFLICT,
        details={"status": "completed"},
    )
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.data["success"] is False
    assert response.data["message"] == Messages.ORDER_NOT_PENDING
    assert response.data["error"] == {
        "code": "CONFLICT",
        "status": 409,
        "details": {"status": "completed"},
    }
    assert "data" not in response.data


def test_application_error_carries_domain_data():
    request = factory.post("/api/coupons/validate")
    exc = ApplicationError(
        "NOT_FOUND",
        Messages.COUPON_NOT_FOUND,
        status_code=status.HTTP_404_NOT_FOUND,
        data={"valid": False, "error": "not_found"},
    )
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data["data"] == {"valid": False, "error": "not_found"}


def test_validation_error_preserves_details():
    request = factory.post("/api/orders", data={})
    exc = ValidationError({"items": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data["message"] == Messages.VALIDATION_FAILED
    assert response.data["error"]["code"] == "VALIDATION_ERROR"
    assert response.data["error"]["details"] == {"items": ["This field is required."]}


def test_not_authenticated_uses_login_message():
    request = factory.get("/api/wishlist/ids")
    response = global_exception_handler(NotAuthenticated(), _context(request))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.data["message"] == Messages.AUTH_REQUIRED
    assert response.data["error"]["code"] == "UNAUTHORIZED"


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/templates/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data["error"]["code"] == "SERVER_ERROR"
    assert response.data["message"] == Messages.SERVER_ERROR
    assert "details" not in response.data["error"]
