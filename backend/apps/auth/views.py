from typing import Optional

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.api.exceptions import ApplicationError, NotFoundError
from apps.api.schemas import ErrorResponseSerializer, envelope
from apps.api.utils import success_response
from apps.api.validation import request_payload, require_fields, validate_payload
from apps.common import get_logger
from .authentication import BearerTokenAuthentication
from .serializers import (
    AuthResultSerializer,
    LoginRequestSerializer,
    ProfileSerializer,
    RegisterRequestSerializer,
)
from .services import AuthService

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Authentication"])
class RegisterView(APIView):
    service: Optional[AuthService] = None
    log = logger.bind(view="RegisterView")
    error_messages = {"post": "Error registering user"}

    @extend_schema(
        summary="Register user",
        request=RegisterRequestSerializer,
        responses={
            201: envelope("RegisterResponse", AuthResultSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        payload = request_payload(request)
        require_fields(
            payload,
            ("name", "email", "password"),
            "Name, email and password are required",
        )
        data = validate_payload(RegisterRequestSerializer, payload)
        self.log.info("Processing registration request", email=data["email"])
        result, error = self.service.register(
            data["name"], data["email"], data["password"], age=data.get("age")
        )
        if error:
            raise ApplicationError.from_result(error)
        self.log.info("Registration completed", user_id=result["user"].id)
        return success_response(
            AuthResultSerializer(result).data,
            message="User registered successfully",
            http_status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Authentication"])
class LoginView(APIView):
    service: Optional[AuthService] = None
    log = logger.bind(view="LoginView")
    error_messages = {"post": "Error logging in"}

    @extend_schema(
        summary="Login",
        request=LoginRequestSerializer,
        responses={
            200: envelope("LoginResponse", AuthResultSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        payload = request_payload(request)
        require_fields(
            payload, ("email", "password"), "Email and password are required"
        )
        data = validate_payload(LoginRequestSerializer, payload)
        result, error = self.service.login(data["email"], data["password"])
        if error:
            raise ApplicationError.from_result(error)
        return success_response(
            AuthResultSerializer(result).data, message="Login successful"
        )


@extend_schema(tags=["Authentication"])
class ProfileView(APIView):
    authentication_classes = [BearerTokenAuthentication]
    permission_classes = [IsAuthenticated]
    service: Optional[AuthService] = None
    log = logger.bind(view="ProfileView")
    error_messages = {"get": "Error fetching profile"}

    @extend_schema(
        summary="Get current user profile",
        responses={
            200: envelope("ProfileResponse", ProfileSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = request.user.id
        self.log.debug("Returning current user profile", user_id=user_id)
        profile = self.service.get_profile(user_id)
        if not profile:
            raise NotFoundError("User not found")
        return success_response(ProfileSerializer(profile).data)
