"""Revenue attributed to a supplier from its settled distribution orders."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import NamedTuple

from django.core.exceptions import ValidationError
from django.db.models import Count, Sum
from django.db.models.functions import ExtractMonth, ExtractYear

from distribution.services import orders_for_supplier
from suppliers.models import SupplierCompany
from targets.exceptions import SupplierNotFound
from targets.incentives import quantize_money
from targets.periods import PeriodFilter

logger = logging.getLogger(__name__)


class MonthlyRevenue(NamedTuple):
    year: int
    month: int
    revenue: Decimal
    order_count: int


class RevenueSummary(NamedTuple):
    total_revenue: Decimal
    total_orders: int
    breakdown: list[MonthlyRevenue]

    def as_dict(self) -> dict:
        return {
            "total_revenue": str(self.total_revenue),
            "total_orders": self.total_orders,
            "breakdown": [
                {
                    "year": row.year,
                    "month": row.month,
                    "revenue": str(row.revenue),
                    "order_count": row.order_count,
                }
                for row in self.breakdown
            ],
        }


def get_supplier(supplier_id) -> SupplierCompany:
    try:
        return SupplierCompany.objects.get(pk=supplier_id)
    except (SupplierCompany.DoesNotExist, ValidationError, ValueError):
        raise SupplierNotFound(f"Supplier company {supplier_id} not found.")


def aggregate_revenue(supplier_id, period: PeriodFilter | None = None) -> RevenueSummary:
    """Sum ``final_amount`` over the supplier's settled orders in ``period``.

    The breakdown has one entry per month with at least one order, oldest
    first. An empty period yields zero revenue and an empty breakdown.
    """
    if period is None:
        period = PeriodFilter.all_time()
    supplier = get_supplier(supplier_id)
    orders = orders_for_supplier(supplier.pk, period)

    totals = orders.aggregate(revenue=Sum("final_amount"), count=Count("id"))
    monthly = (
        orders
        .annotate(order_year=ExtractYear("created_at"), order_month=ExtractMonth("created_at"))
        .values("order_year", "order_month")
        .annotate(revenue=Sum("final_amount"), order_count=Count("id"))
        .order_by("order_year", "order_month")
    )
    breakdown = [
        MonthlyRevenue(
            year=row["order_year"],
            month=row["order_month"],
            revenue=quantize_money(row["revenue"] or Decimal("0")),
            order_count=row["order_count"],
        )
        for row in monthly
    ]

    summary = RevenueSummary(
        total_revenue=quantize_money(totals["revenue"] or Decimal("0")),
        total_orders=totals["count"] or 0,
        breakdown=breakdown,
    )
    logger.debug(
        "Revenue for supplier=%s period=%s: %s over %d orders",
        supplier.pk,
        period,
        summary.total_revenue,
        summary.total_orders,
    )
    return summary
