"""
URL configuration for addresses_backend project.

Tenant-scoped API lives under `api/v1/`; `healthz/` stays unauthenticated.
"""
from django.http import JsonResponse
from django.urls import include, path


def healthz(_request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("healthz/", healthz, name="healthz"),
    path("api/v1/", include("addresses.urls")),
]
