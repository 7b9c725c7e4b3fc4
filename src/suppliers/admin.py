from django.contrib import admin

from .models import Product, SupplierCompany


class ProductInline(admin.TabularInline):
    model = Product
    extra = 0
    fields = ("product_no", "name", "category", "packs_per_pallet", "price_per_pack", "is_active")


@admin.register(SupplierCompany)
class SupplierCompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "contact_person", "phone", "payment_terms", "is_active")
    list_filter = ("is_active", "payment_terms")
    search_fields = ("name", "code", "contact_person", "phone", "email")
    inlines = [ProductInline]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("product_no", "name", "supplier_company", "category", "price_per_pack", "is_active")
    list_filter = ("category", "is_active", "supplier_company")
    search_fields = ("product_no", "name")
    list_select_related = ("supplier_company",)
