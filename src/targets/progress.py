"""Actual packs sold against a supplier target."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Sum
from django.db.models.functions import ExtractDay

from distribution.models import DistributionOrderItem
from distribution.services import orders_for_supplier
from targets.incentives import CENT
from targets.periods import WEEK_SLOTS, PeriodFilter, week_slot_for_day


def _category_actuals(orders) -> dict:
    rows = (
        DistributionOrderItem.objects
        .filter(order__in=orders)
        .values("product__category")
        .annotate(packs=Sum("quantity"))
        .order_by("product__category")
    )
    return {row["product__category"]: row["packs"] or 0 for row in rows}


def _weekly_actuals(orders) -> dict:
    weekly = dict.fromkeys(WEEK_SLOTS, 0)
    rows = (
        orders
        .annotate(day=ExtractDay("created_at"))
        .values("day")
        .annotate(packs=Sum("total_packs"))
        .order_by("day")
    )
    for row in rows:
        weekly[week_slot_for_day(row["day"])] += row["packs"] or 0
    return weekly


def target_progress(target) -> dict:
    """Packs delivered on settled orders in the target's month versus the target."""
    orders = orders_for_supplier(
        target.supplier_company_id,
        PeriodFilter.for_month(target.year, target.month),
    )
    actual = orders.aggregate(packs=Sum("total_packs"))["packs"] or 0
    total = target.total_packs_target

    percentage = None
    if total:
        percentage = (Decimal(actual) * 100 / Decimal(total)).quantize(CENT, rounding=ROUND_HALF_UP)

    return {
        "target_id": str(target.pk),
        "supplier_company": str(target.supplier_company_id),
        "year": target.year,
        "month": target.month,
        "total_packs_target": total,
        "actual_packs": actual,
        "weekly_targets": target.weekly_targets,
        "weekly_actuals": _weekly_actuals(orders),
        "category_targets": target.category_targets,
        "category_actuals": _category_actuals(orders),
        "percentage_achieved": None if percentage is None else str(percentage),
        "remaining_target": max(total - actual, 0),
    }
