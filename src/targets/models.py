"""Monthly pack targets and incentive agreements per supplier company."""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimeStampedModel

MIN_YEAR = 2020
MAX_YEAR = 2100


def _year_validators():
    return [MinValueValidator(MIN_YEAR), MaxValueValidator(MAX_YEAR)]


def _month_validators():
    return [MinValueValidator(1), MaxValueValidator(12)]


class SupplierTarget(TimeStampedModel):
    """Monthly volume target for a supplier, split by week slot and optionally by category.

    ``weekly_targets`` always holds the four keys ``week1``..``week4``.
    ``category_targets`` is null when the supplier has no category split.
    """

    supplier_company = models.ForeignKey(
        "suppliers.SupplierCompany",
        on_delete=models.PROTECT,
        related_name="targets",
    )
    year = models.PositiveSmallIntegerField(validators=_year_validators())
    month = models.PositiveSmallIntegerField(validators=_month_validators())
    total_packs_target = models.PositiveIntegerField(default=0)
    weekly_targets = models.JSONField(default=dict)
    category_targets = models.JSONField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplier_targets_created",
    )

    class Meta:
        ordering = ["-year", "-month", "supplier_company__name"]
        constraints = [
            models.UniqueConstraint(
                fields=["supplier_company", "year", "month"],
                name="uniq_supplier_target_period",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.supplier_company} {self.year}-{self.month:02d}"

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month:02d}"


class SupplierIncentive(TimeStampedModel):
    """Percentage-of-revenue rebate agreed with a supplier for one month."""

    supplier_company = models.ForeignKey(
        "suppliers.SupplierCompany",
        on_delete=models.PROTECT,
        related_name="incentives",
    )
    year = models.PositiveSmallIntegerField(validators=_year_validators())
    month = models.PositiveSmallIntegerField(validators=_month_validators())
    incentive_percentage = models.DecimalField(
        "incentive (%)",
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    actual_incentive_paid = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    notes = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplier_incentives_created",
    )

    class Meta:
        ordering = ["-year", "-month", "supplier_company__name"]
        constraints = [
            models.UniqueConstraint(
                fields=["supplier_company", "year", "month"],
                name="uniq_supplier_incentive_period",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.supplier_company} {self.year}-{self.month:02d} ({self.incentive_percentage}%)"

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month:02d}"
