from django.contrib import admin

from .models import DistributionOrder, DistributionOrderItem


class DistributionOrderItemInline(admin.TabularInline):
    model = DistributionOrderItem
    extra = 0
    fields = ("product", "quantity", "unit_price", "total_price")
    readonly_fields = ("total_price",)


@admin.register(DistributionOrder)
class DistributionOrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "supplier_company",
        "total_packs",
        "final_amount",
        "payment_status",
        "status",
        "created_at",
    )
    list_filter = ("payment_status", "status", "supplier_company")
    search_fields = ("order_number", "customer_name")
    date_hierarchy = "created_at"
    list_select_related = ("supplier_company",)
    inlines = [DistributionOrderItemInline]
