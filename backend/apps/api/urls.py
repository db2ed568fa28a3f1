from django.urls import re_path

from apps.addresses.views import AddressDetailView, AddressListView, UserAddressListView
from apps.auth.views import LoginView, ProfileView, RegisterView
from apps.common.views import api_health
from apps.users.views import UserDetailView, UserListView

from .container import build_container

container = build_container()

urlpatterns = [
    re_path(r"^health/?$", api_health, name="api-health"),
    re_path(
        r"^users/?$",
        UserListView.as_view(service=container.users),
        name="api-users-list",
    ),
    re_path(
        r"^users/(?P<user_id>[^/]+)/?$",
        UserDetailView.as_view(service=container.users),
        name="api-users-detail",
    ),
    re_path(
        r"^addresses/?$",
        AddressListView.as_view(service=container.addresses),
        name="api-addresses-list",
    ),
    # Must precede the address detail route.
    re_path(
        r"^addresses/user/(?P<user_id>[^/]+)/?$",
        UserAddressListView.as_view(service=container.addresses),
        name="api-addresses-by-user",
    ),
    re_path(
        r"^addresses/(?P<address_id>[^/]+)/?$",
        AddressDetailView.as_view(service=container.addresses),
        name="api-addresses-detail",
    ),
    re_path(
        r"^auth/register/?$",
        RegisterView.as_view(service=container.auth),
        name="api-auth-register",
    ),
    re_path(
        r"^auth/login/?$",
        LoginView.as_view(service=container.auth),
        name="api-auth-login",
    ),
    re_path(
        r"^auth/profile/?$",
        ProfileView.as_view(service=container.auth),
        name="api-auth-profile",
    ),
]
