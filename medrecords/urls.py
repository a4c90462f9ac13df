"""
Root URL configuration.

The registry app owns ``/hospital``, ``/users``, ``/healthz`` and
``/metrics``; the admin and the generated API docs are mounted here.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework.permissions import AllowAny

api_info = openapi.Info(
    title="Patient Record Registry API",
    default_version="v1",
    description="Hospital registration and shared patient records.",
    contact=openapi.Contact(email=settings.DEFAULT_FROM_EMAIL),
)

schema_view = get_schema_view(api_info, public=True, permission_classes=[AllowAny])

urlpatterns = [
    path("", include("registry.routers")),
    path("admin/", admin.site.urls),
    path("swagger/", schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="redoc"),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
