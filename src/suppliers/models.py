"""Models for supplier companies and the products they carry."""
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


class ProductCategory(models.TextChoices):
    """Closed classification of the product types a supplier may carry."""

    CSD = "CSD", "Carbonated soft drink"
    ED = "ED", "Energy drink"
    WATER = "WATER", "Water"
    JUICE = "JUICE", "Juice"


class SupplierCompany(TimeStampedModel):
    class PaymentTerms(models.TextChoices):
        CASH = "CASH", "Cash"
        NET_15 = "NET_15", "Net 15"
        NET_30 = "NET_30", "Net 30"
        NET_60 = "NET_60", "Net 60"

    name = models.CharField(max_length=255, unique=True)
    code = models.CharField(max_length=30, unique=True)
    contact_person = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")
    payment_terms = models.CharField(
        max_length=10,
        choices=PaymentTerms.choices,
        default=PaymentTerms.CASH,
    )
    notes = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "supplier company"
        verbose_name_plural = "supplier companies"

    def __str__(self):
        return self.name


class Product(TimeStampedModel):
    supplier_company = models.ForeignKey(
        SupplierCompany,
        on_delete=models.PROTECT,
        related_name="products",
    )
    product_no = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=255)
    category = models.CharField(
        max_length=10,
        choices=ProductCategory.choices,
        db_index=True,
    )
    packs_per_pallet = models.PositiveIntegerField(default=1)
    price_per_pack = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["supplier_company__name", "name"]

    def __str__(self):
        return f"{self.name} ({self.product_no})"
