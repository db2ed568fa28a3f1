from rest_framework.exceptions import PermissionDenied
from rest_framework_simplejwt.authentication import (
    AUTH_HEADER_TYPE_BYTES,
    JWTStatelessUserAuthentication,
)

from apps.common import get_logger
from .credentials import CredentialHelper

logger = get_logger(__name__).bind(component="auth", layer="authentication")


class InvalidOrExpiredToken(PermissionDenied):
    default_detail = "Invalid or expired token"
    default_code = "invalid_token"


class BearerTokenAuthentication(JWTStatelessUserAuthentication):
    """
    Stateless bearer authentication yielding the `{id, email}` token identity.

    A missing header (or one without a Bearer token) leaves the request
    anonymous so the permission check answers 401; a token that fails
    verification is rejected with 403.
    """

    credentials = CredentialHelper()

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None
        parts = header.split()
        if len(parts) != 2 or parts[0] not in AUTH_HEADER_TYPE_BYTES:
            logger.debug("Authorization header without bearer token ignored")
            return None
        identity = self.credentials.verify_token(parts[1])
        if identity is None:
            raise InvalidOrExpiredToken()
        return identity, identity.token
