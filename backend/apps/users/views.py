from typing import Optional

from django.db import IntegrityError
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.views import APIView

from apps.api.exceptions import ConflictError, NotFoundError
from apps.api.schemas import ErrorResponseSerializer, MessageResponseSerializer, envelope
from apps.api.utils import success_response
from apps.api.validation import (
    request_payload,
    require_fields,
    require_id,
    validate_payload,
)
from apps.common import get_logger
from .serializers import UserSerializer, UserWriteSerializer
from .services import UserService

logger = get_logger(__name__).bind(component="users", layer="view")

EMAIL_TAKEN = "User with this email already exists"
USER_ID_PARAMETER = OpenApiParameter("user_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Users"])
class UserListView(APIView):
    service: Optional[UserService] = None
    log = logger.bind(view="UserListView")
    error_messages = {
        "get": "Error fetching users",
        "post": "Error creating user",
    }

    @extend_schema(
        summary="List users",
        description="Returns every user, newest first.",
        responses={200: envelope("UserListResponse", UserSerializer, many=True)},
    )
    def get(self, request):
        self.log.debug("Listing users via API")
        users = self.service.get_all_users()
        return success_response(
            UserSerializer(users, many=True).data, count=len(users)
        )

    @extend_schema(
        summary="Create user",
        request=UserWriteSerializer,
        responses={
            201: envelope("UserCreateResponse", UserSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        payload = request_payload(request)
        require_fields(payload, ("name", "email"), "Name and email are required")
        data = validate_payload(UserWriteSerializer, payload)
        if self.service.get_user_by_email(data["email"]):
            self.log.info("User create rejected: email taken", email=data["email"])
            raise ConflictError(EMAIL_TAKEN)
        try:
            dto = self.service.create_user(
                data["name"], data["email"], age=data.get("age")
            )
        except IntegrityError as exc:
            self.log.warning(
                "User create hit unique constraint", email=data["email"], error=str(exc)
            )
            raise ConflictError(EMAIL_TAKEN) from exc
        self.log.info("User created via API", user_id=dto.id)
        return success_response(
            UserSerializer(dto).data,
            message="User created successfully",
            http_status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Users"])
class UserDetailView(APIView):
    service: Optional[UserService] = None
    log = logger.bind(view="UserDetailView")
    error_messages = {
        "get": "Error fetching user",
        "patch": "Error updating user",
        "delete": "Error deleting user",
    }

    @extend_schema(
        summary="Get user by ID",
        parameters=[USER_ID_PARAMETER],
        responses={
            200: envelope("UserDetailResponse", UserSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, user_id):
        uid = require_id(user_id, "user")
        self.log.debug("Fetching user detail", user_id=uid)
        dto = self.service.get_user_by_id(uid)
        if not dto:
            raise NotFoundError("User not found")
        return success_response(UserSerializer(dto).data)

    @extend_schema(
        summary="Update user",
        description="Partial update; fields left out keep their current values.",
        parameters=[USER_ID_PARAMETER],
        request=UserWriteSerializer,
        responses={
            200: envelope("UserUpdateResponse", UserSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, user_id):
        uid = require_id(user_id, "user")
        self.log.info("Patching user", user_id=uid)
        data = validate_payload(
            UserWriteSerializer, request_payload(request), partial=True
        )
        email = data.get("email")
        if email and self.service.is_email_taken(email, exclude_id=uid):
            raise ConflictError(EMAIL_TAKEN)
        try:
            dto = self.service.update_user(uid, data)
        except IntegrityError as exc:
            self.log.warning(
                "User update hit unique constraint", user_id=uid, error=str(exc)
            )
            raise ConflictError(EMAIL_TAKEN) from exc
        if not dto:
            raise NotFoundError("User not found")
        return success_response(
            UserSerializer(dto).data, message="User updated successfully"
        )

    @extend_schema(
        summary="Delete user",
        description="Deletes the user together with the addresses it owns.",
        parameters=[USER_ID_PARAMETER],
        responses={
            200: MessageResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, user_id):
        uid = require_id(user_id, "user")
        self.log.info("Deleting user via API", user_id=uid)
        if not self.service.delete_user(uid):
            raise NotFoundError("User not found")
        return success_response(message="User deleted successfully")
