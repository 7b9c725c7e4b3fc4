"""Serializers for supplier companies."""
from rest_framework import serializers

from suppliers.models import SupplierCompany


class SupplierCompanySerializer(serializers.ModelSerializer):
    product_count = serializers.IntegerField(source="products.count", read_only=True)

    class Meta:
        model = SupplierCompany
        fields = [
            "id", "name", "code", "contact_person", "phone", "email", "address",
            "payment_terms", "notes", "is_active", "product_count", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_code(self, value):
        return value.strip().upper()
