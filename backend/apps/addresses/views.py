from typing import Optional

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.views import APIView

from apps.api.exceptions import ApplicationError, NotFoundError
from apps.api.schemas import ErrorResponseSerializer, MessageResponseSerializer, envelope
from apps.api.utils import success_response
from apps.api.validation import (
    request_payload,
    require_fields,
    require_id,
    validate_payload,
)
from apps.common import get_logger
from .serializers import (
    AddressCreateSerializer,
    AddressSerializer,
    AddressUpdateSerializer,
)
from .services import AddressService

logger = get_logger(__name__).bind(component="addresses", layer="view")

REQUIRED_FIELDS = ("street", "city", "zipCode", "country", "userId")
ADDRESS_ID_PARAMETER = OpenApiParameter("address_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Addresses"])
class AddressListView(APIView):
    service: Optional[AddressService] = None
    log = logger.bind(view="AddressListView")
    error_messages = {
        "get": "Error fetching addresses",
        "post": "Error creating address",
    }

    @extend_schema(
        summary="List addresses",
        description="Returns every address together with its owner.",
        responses={200: envelope("AddressListResponse", AddressSerializer, many=True)},
    )
    def get(self, request):
        self.log.debug("Listing addresses via API")
        addresses = self.service.get_all_addresses()
        return success_response(
            AddressSerializer(addresses, many=True).data, count=len(addresses)
        )

    @extend_schema(
        summary="Create address",
        request=AddressCreateSerializer,
        responses={
            201: envelope("AddressCreateResponse", AddressSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="The referenced user does not exist.",
            ),
        },
    )
    def post(self, request):
        payload = request_payload(request)
        require_fields(payload, REQUIRED_FIELDS, "All fields are required")
        data = validate_payload(AddressCreateSerializer, payload)
        self.log.info("Creating address via API", user_id=data["user_id"])
        dto, error = self.service.create_address(
            street=data["street"],
            city=data["city"],
            zip_code=data["zip_code"],
            country=data["country"],
            user_id=data["user_id"],
        )
        if error:
            raise ApplicationError.from_result(error)
        return success_response(
            AddressSerializer(dto).data,
            message="Address created successfully",
            http_status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Addresses"])
class AddressDetailView(APIView):
    service: Optional[AddressService] = None
    log = logger.bind(view="AddressDetailView")
    error_messages = {
        "get": "Error fetching address",
        "patch": "Error updating address",
        "delete": "Error deleting address",
    }

    @extend_schema(
        summary="Get address by ID",
        parameters=[ADDRESS_ID_PARAMETER],
        responses={
            200: envelope("AddressDetailResponse", AddressSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, address_id):
        aid = require_id(address_id, "address")
        self.log.debug("Fetching address", address_id=aid)
        dto = self.service.get_address_by_id(aid)
        if not dto:
            raise NotFoundError("Address not found")
        return success_response(AddressSerializer(dto).data)

    @extend_schema(
        summary="Update address",
        description="Partial update of street, city, zipCode or country. The owner cannot change.",
        parameters=[ADDRESS_ID_PARAMETER],
        request=AddressUpdateSerializer,
        responses={
            200: envelope("AddressUpdateResponse", AddressSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, address_id):
        aid = require_id(address_id, "address")
        self.log.info("Patching address", address_id=aid)
        data = validate_payload(
            AddressUpdateSerializer, request_payload(request), partial=True
        )
        dto = self.service.update_address(aid, data)
        if not dto:
            raise NotFoundError("Address not found")
        return success_response(
            AddressSerializer(dto).data, message="Address updated successfully"
        )

    @extend_schema(
        summary="Delete address",
        parameters=[ADDRESS_ID_PARAMETER],
        responses={
            200: MessageResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, address_id):
        aid = require_id(address_id, "address")
        self.log.info("Deleting address via API", address_id=aid)
        if not self.service.delete_address(aid):
            raise NotFoundError("Address not found")
        return success_response(message="Address deleted successfully")


@extend_schema(tags=["Addresses"])
class UserAddressListView(APIView):
    service: Optional[AddressService] = None
    log = logger.bind(view="UserAddressListView")
    error_messages = {"get": "Error fetching addresses for user"}

    @extend_schema(
        summary="List addresses for a user",
        description="An unknown user simply has no addresses.",
        parameters=[OpenApiParameter("user_id", int, OpenApiParameter.PATH)],
        responses={
            200: envelope("UserAddressListResponse", AddressSerializer, many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, user_id):
        uid = require_id(user_id, "user")
        self.log.debug("Listing addresses for user", user_id=uid)
        addresses = self.service.get_addresses_by_user_id(uid)
        return success_response(
            AddressSerializer(addresses, many=True).data, count=len(addresses)
        )
