"""Models for distribution orders placed against supplier companies."""
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class DistributionOrder(TimeStampedModel):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PROCESSING = "PROCESSING", "Processing"
        SHIPPED = "SHIPPED", "Shipped"
        DELIVERED = "DELIVERED", "Delivered"
        CANCELLED = "CANCELLED", "Cancelled"

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PARTIAL = "PARTIAL", "Partial"
        CONFIRMED = "CONFIRMED", "Confirmed"

    order_number = models.CharField(max_length=50, unique=True)
    supplier_company = models.ForeignKey(
        "suppliers.SupplierCompany",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    customer_name = models.CharField(max_length=255, blank=True, default="")
    total_packs = models.PositiveIntegerField(default=0)
    original_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    final_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    remark = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="distribution_orders_created",
    )
    # Revenue is attributed to the period of this timestamp; back-dated imports set it explicitly.
    created_at = models.DateTimeField("created at", default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["supplier_company", "created_at"], name="dist_order_supp_created_idx"),
        ]

    def __str__(self):
        return self.order_number

    @property
    def balance(self) -> Decimal:
        return self.final_amount - self.amount_paid


class DistributionOrderItem(TimeStampedModel):
    order = models.ForeignKey(
        DistributionOrder,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "suppliers.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField("quantity (packs)")
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["product__name"]

    def save(self, *args, **kwargs):
        self.total_price = Decimal(str(self.quantity)) * self.unit_price
        super().save(*args, **kwargs)
