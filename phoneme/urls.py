"""
URL configuration for the Phoneme Workspace backend.

All JSON endpoints live under ``/api/`` on a single NinjaAPI instance;
the Django admin doubles as the workspace admin console.
"""
from django.contrib import admin
from django.urls import path
from ninja import NinjaAPI

from assistant.api import router as assistant_router
from phoneme.system_api import router as system_router

api = NinjaAPI(title="Phoneme Workspace API", version="0.1.0")
api.add_router("/ai", assistant_router, tags=["ai"])
api.add_router("/system", system_router, tags=["system"])

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", api.urls),
]
