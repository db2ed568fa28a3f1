from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ParseError, Throttled, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import (
    ApplicationError,
    ConflictError,
    MissingReferenceError,
    NotFoundError,
    global_exception_handler,
)
from apps.auth.authentication import InvalidOrExpiredToken

factory = APIRequestFactory()


class DummyView:
    error_messages = {"get": "Error fetching users"}


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_envelope():
    request = factory.post("/api/users")
    response = global_exception_handler(
        ConflictError("User with this email already exists"), _context(request)
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.data == {
        "success": False,
        "message": "User with this email already exists",
    }


def test_from_result_picks_matching_error_class():
    exc = ApplicationError.from_result(("REFERENCE_ERROR", "User not found", None))
    assert isinstance(exc, MissingReferenceError)
    assert isinstance(exc, NotFoundError)
    assert exc.status_code == status.HTTP_404_NOT_FOUND
    fallback = ApplicationError.from_result(("SOMETHING_ELSE", "boom", None))
    assert fallback.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR


def test_drf_validation_error_is_flattened():
    request = factory.post("/api/users", data={})
    exc = ValidationError({"email": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data["message"] == "Validation failed"
    assert response.data["error"] == "email: This field is required."


def test_parse_error_is_malformed_request():
    request = factory.post("/api/users")
    response = global_exception_handler(ParseError(), _context(request))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data["message"] == "Malformed request"


def test_auth_failures():
    request = factory.get("/api/auth/profile")
    missing = global_exception_handler(NotAuthenticated(), _context(request))
    assert missing.data["message"] == "Access token required"
    invalid = global_exception_handler(InvalidOrExpiredToken(), _context(request))
    assert invalid.status_code == status.HTTP_403_FORBIDDEN
    assert invalid.data == {"success": False, "message": "Invalid or expired token"}


def test_throttled_message():
    request = factory.get("/api/users")
    response = global_exception_handler(Throttled(wait=30), _context(request))
    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.data["message"] == (
        "Too many requests from this IP, please try again later."
    )


def test_unhandled_exception_uses_view_message():
    request = factory.get("/api/users")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data == {
        "success": False,
        "message": "Error fetching users",
        "error": "boom",
    }


def test_unhandled_exception_without_view_message():
    request = factory.delete("/api/users/1")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    assert response.data["message"] == "Something went wrong"


def test_django_validation_error_is_a_server_error():
    request = factory.get("/api/users")
    response = global_exception_handler(
        DjangoValidationError("bad value"), _context(request)
    )
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data["message"] == "Error fetching users"
