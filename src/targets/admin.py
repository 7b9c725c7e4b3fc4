"""Django admin for supplier targets and incentives.

Admin edits follow the same rules as the API: the supplier and period of a
saved record are read-only, and weekly/category splits are normalised and
reconciled before they are stored.
"""
from django import forms
from django.conf import settings
from django.contrib import admin

from targets.exceptions import TargetValidationError
from targets.models import SupplierIncentive, SupplierTarget
from targets.services import (
    build_incentive_report,
    preview_target,
    reconciliation_is_strict,
    target_validation,
)

PERIOD_KEY_FIELDS = ("supplier_company", "year", "month")


class SupplierTargetAdminForm(forms.ModelForm):
    class Meta:
        model = SupplierTarget
        fields = "__all__"

    def clean(self):
        cleaned = super().clean()
        if self.errors:
            return cleaned
        try:
            result = preview_target(
                cleaned.get("total_packs_target"),
                cleaned.get("weekly_targets"),
                cleaned.get("category_targets"),
                strict=reconciliation_is_strict(),
            )
        except TargetValidationError as exc:
            field = (exc.field or "").split(".")[0]
            self.add_error(field if field in self.fields else None, exc.message)
            return cleaned
        cleaned["weekly_targets"] = result.weekly
        cleaned["category_targets"] = result.category
        return cleaned


class _PeriodRecordAdmin(admin.ModelAdmin):
    list_filter = ("year", "month", "supplier_company")
    search_fields = ("supplier_company__name", "supplier_company__code")
    readonly_fields = ("created_by", "created_at", "updated_at")
    ordering = ("-year", "-month")

    def get_readonly_fields(self, request, obj=None):
        fields = super().get_readonly_fields(request, obj)
        if obj is not None:
            fields = tuple(fields) + PERIOD_KEY_FIELDS
        return fields

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by_id is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)


@admin.register(SupplierTarget)
class SupplierTargetAdmin(_PeriodRecordAdmin):
    form = SupplierTargetAdminForm
    list_display = ("supplier_company", "period", "total_packs_target", "reconciled", "created_by")

    @admin.display(boolean=True, description="Reconciled")
    def reconciled(self, obj):
        return target_validation(obj).is_reconciled


@admin.register(SupplierIncentive)
class SupplierIncentiveAdmin(_PeriodRecordAdmin):
    list_display = (
        "supplier_company", "period", "incentive_percentage",
        "calculated_display", "actual_incentive_paid", "variance_display",
    )

    @admin.display(description="Calculated")
    def calculated_display(self, obj):
        return f"{settings.CURRENCY_SYMBOL}{build_incentive_report(obj).calculated_incentive:,.2f}"

    @admin.display(description="Variance")
    def variance_display(self, obj):
        variance = build_incentive_report(obj).variance
        return "-" if variance is None else f"{settings.CURRENCY_SYMBOL}{variance:,.2f}"
