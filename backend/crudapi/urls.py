from django.conf import settings
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from apps.common.views import api_root, live_health, ready_health, route_not_found

urlpatterns = [
    path("", api_root, name="root"),
    path("api/", include("apps.api.urls")),
    path("health/live", live_health, name="health-live"),
    path("health/ready", ready_health, name="health-ready"),
]

# Interactive docs only while developing.
if settings.DEBUG:
    urlpatterns += [
        path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
        path(
            "api-docs/",
            SpectacularSwaggerView.as_view(url_name="schema"),
            name="swagger-ui",
        ),
    ]

# Anything unmatched gets the JSON envelope rather than Django's HTML page.
urlpatterns += [re_path(r"^.*$", route_not_found, name="route-not-found")]

handler404 = "apps.common.views.route_not_found"
handler500 = "apps.common.views.server_error"
