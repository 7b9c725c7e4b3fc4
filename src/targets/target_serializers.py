"""DRF serializers for supplier targets and incentives."""
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from suppliers.models import SupplierCompany
from targets import services
from targets.models import MAX_YEAR, MIN_YEAR, SupplierIncentive, SupplierTarget
from targets.periods import daily_target, working_days


def _actor(serializer):
    request = serializer.context.get("request")
    user = getattr(request, "user", None)
    return user if user is not None and user.is_authenticated else None


# ────────────────────────────────────────────────────────────
# Targets
# ────────────────────────────────────────────────────────────

class SupplierTargetSerializer(serializers.ModelSerializer):
    supplier_company_name = serializers.CharField(source="supplier_company.name", read_only=True)

    class Meta:
        model = SupplierTarget
        fields = [
            "id", "supplier_company", "supplier_company_name", "year", "month",
            "total_packs_target", "weekly_targets", "category_targets", "notes",
            "created_by", "created_at", "updated_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        validation = services.target_validation(instance)
        data.update(validation.as_dict())
        data["is_reconciled"] = validation.is_reconciled
        data["working_days"] = len(working_days(instance.year, instance.month))
        data["daily_target"] = daily_target(instance.total_packs_target, instance.year, instance.month)
        return data


class SupplierTargetCreateSerializer(serializers.Serializer):
    """Pack counts are passed through untouched; the target services reject non-integers."""

    supplier_company = serializers.PrimaryKeyRelatedField(queryset=SupplierCompany.objects.all())
    year = serializers.IntegerField(min_value=MIN_YEAR, max_value=MAX_YEAR)
    month = serializers.IntegerField(min_value=1, max_value=12)
    total_packs_target = serializers.JSONField()
    weekly_targets = serializers.JSONField()
    category_targets = serializers.JSONField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def create(self, validated_data):
        return services.create_target(
            supplier_id=validated_data["supplier_company"].pk,
            year=validated_data["year"],
            month=validated_data["month"],
            total_packs_target=validated_data["total_packs_target"],
            weekly_targets=validated_data["weekly_targets"],
            category_targets=validated_data.get("category_targets"),
            notes=validated_data.get("notes", ""),
            actor=_actor(self),
        )


class SupplierTargetUpdateSerializer(serializers.Serializer):
    """Supplier, year and month identify the target and are not accepted here."""

    total_packs_target = serializers.JSONField(required=False)
    weekly_targets = serializers.JSONField(required=False)
    category_targets = serializers.JSONField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def update(self, instance, validated_data):
        return services.update_target(
            instance.supplier_company_id,
            instance.year,
            instance.month,
            validated_data,
            actor=_actor(self),
        )


class TargetValidateSerializer(serializers.Serializer):
    total_packs_target = serializers.JSONField()
    weekly_targets = serializers.JSONField()
    category_targets = serializers.JSONField(required=False, allow_null=True)


# ────────────────────────────────────────────────────────────
# Incentives
# ────────────────────────────────────────────────────────────

class SupplierIncentiveSerializer(serializers.ModelSerializer):
    """Revenue, calculated incentive and variance are recomputed from orders on every read."""

    supplier_company_name = serializers.CharField(source="supplier_company.name", read_only=True)

    class Meta:
        model = SupplierIncentive
        fields = [
            "id", "supplier_company", "supplier_company_name", "year", "month",
            "incentive_percentage", "actual_incentive_paid", "notes",
            "created_by", "created_at", "updated_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(services.build_incentive_report(instance).as_dict())
        return data


class SupplierIncentiveCreateSerializer(serializers.Serializer):
    supplier_company = serializers.PrimaryKeyRelatedField(queryset=SupplierCompany.objects.all())
    year = serializers.IntegerField(min_value=MIN_YEAR, max_value=MAX_YEAR)
    month = serializers.IntegerField(min_value=1, max_value=12)
    incentive_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100"),
    )
    actual_incentive_paid = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True,
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def create(self, validated_data):
        return services.create_incentive(
            supplier_id=validated_data["supplier_company"].pk,
            year=validated_data["year"],
            month=validated_data["month"],
            incentive_percentage=validated_data["incentive_percentage"],
            actual_incentive_paid=validated_data.get("actual_incentive_paid"),
            notes=validated_data.get("notes", ""),
            actor=_actor(self),
        )


class SupplierIncentiveUpdateSerializer(serializers.Serializer):
    incentive_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100"), required=False,
    )
    actual_incentive_paid = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True,
    )
    notes = serializers.CharField(required=False, allow_blank=True)

    def update(self, instance, validated_data):
        return services.update_incentive(
            instance.supplier_company_id,
            instance.year,
            instance.month,
            validated_data,
            actor=_actor(self),
        )
