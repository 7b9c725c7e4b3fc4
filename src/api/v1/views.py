"""API views for supplier companies."""
from rest_framework import viewsets

from api.v1.permissions import CanManageSupplierPerformance
from api.v1.serializers import SupplierCompanySerializer
from suppliers.models import SupplierCompany


class SupplierCompanyViewSet(viewsets.ModelViewSet):
    serializer_class = SupplierCompanySerializer
    queryset = SupplierCompany.objects.all()
    permission_classes = [CanManageSupplierPerformance]
    filterset_fields = ["is_active", "payment_terms"]
    search_fields = ["name", "code", "contact_person", "phone"]
    ordering_fields = ["name", "code", "created_at"]
