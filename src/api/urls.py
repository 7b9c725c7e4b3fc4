"""Main API URL router for /api/v1/."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from api.v1 import views as v1_views
from targets import target_views

router = DefaultRouter()
router.register(r"supplier-companies", v1_views.SupplierCompanyViewSet, basename="supplier-company")
router.register(r"supplier-targets", target_views.SupplierTargetViewSet, basename="supplier-target")
router.register(r"supplier-incentives", target_views.SupplierIncentiveViewSet, basename="supplier-incentive")


app_name = "api"
urlpatterns = [
    path("", include(router.urls)),
]
