"""Repository services for supplier targets and incentives.

Each create/update runs in one transaction so a target is never stored with a
partially written weekly or category map. Errors are raised as
``targets.exceptions`` types and left to the caller.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from targets.decomposition import category_opted_in, normalize_category, validate_target
from targets.exceptions import (
    DuplicateRecord,
    IncentiveNotFound,
    TargetNotFound,
    TargetValidationError,
)
from targets.incentives import IncentiveReport, validate_amount, validate_percentage
from targets.models import MAX_YEAR, MIN_YEAR, SupplierIncentive, SupplierTarget
from targets.periods import PeriodFilter
from targets.revenue import aggregate_revenue, get_supplier

logger = logging.getLogger(__name__)

KEY_FIELDS = frozenset({"supplier_company", "supplier_company_id", "supplier_id", "year", "month"})
TARGET_MUTABLE_FIELDS = frozenset({"total_packs_target", "weekly_targets", "category_targets", "notes"})
INCENTIVE_MUTABLE_FIELDS = frozenset({"incentive_percentage", "actual_incentive_paid", "notes"})


def reconciliation_is_strict() -> bool:
    return getattr(settings, "SUPPLIER_TARGET_RECONCILIATION", "advisory") == "strict"


def _check_period(year, month) -> None:
    if isinstance(year, bool) or not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        raise TargetValidationError(
            f"Year must be an integer between {MIN_YEAR} and {MAX_YEAR}.", field="year"
        )
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise TargetValidationError("Month must be an integer between 1 and 12.", field="month")


def _check_places(value: Decimal | None, field: str) -> Decimal | None:
    if value is not None and value.as_tuple().exponent < -2:
        raise TargetValidationError(f"{field} allows at most 2 decimal places.", field=field)
    return value


def _check_patch(patch: dict, allowed: frozenset) -> None:
    frozen = sorted(KEY_FIELDS & set(patch))
    if frozen:
        raise TargetValidationError(
            f"Supplier, year and month cannot be changed ({', '.join(frozen)}).",
            field=frozen[0],
        )
    unknown = sorted(set(patch) - allowed)
    if unknown:
        raise TargetValidationError(f"Unknown field(s): {', '.join(unknown)}.", field=unknown[0])


def _lookup(model, not_found, **filters):
    try:
        return model.objects.select_related("supplier_company").get(**filters)
    except (model.DoesNotExist, ValidationError, ValueError):
        raise not_found(f"{model._meta.verbose_name.capitalize()} not found.")


def preview_target(total, weekly, category=None, *, strict: bool = False):
    """Validate a target as it would be stored; an all-zero category split is dropped."""
    category = normalize_category(category)
    if not category_opted_in(category):
        category = None
    return validate_target(total, weekly, category, strict=strict)


def _checked_target_maps(total, weekly, category):
    return preview_target(total, weekly, category, strict=reconciliation_is_strict())


def _warn_mismatch(target: SupplierTarget, result) -> None:
    if not result.is_reconciled:
        logger.warning(
            "Target for supplier=%s period=%s saved unreconciled: %s",
            target.supplier_company_id,
            target.period,
            " ".join(result.mismatches()),
        )


# ------------------------------------------------------------------
# Targets
# ------------------------------------------------------------------

def target_validation(target: SupplierTarget):
    """Reconciliation flags for a stored target."""
    return validate_target(
        target.total_packs_target,
        target.weekly_targets,
        target.category_targets,
    )


@transaction.atomic
def create_target(
    *,
    supplier_id,
    year: int,
    month: int,
    total_packs_target: int,
    weekly_targets,
    category_targets=None,
    notes: str = "",
    actor=None,
) -> SupplierTarget:
    supplier = get_supplier(supplier_id)
    _check_period(year, month)
    result = _checked_target_maps(total_packs_target, weekly_targets, category_targets)

    if SupplierTarget.objects.filter(supplier_company=supplier, year=year, month=month).exists():
        raise DuplicateRecord(f"A target already exists for {supplier} {year}-{month:02d}.")

    try:
        with transaction.atomic():
            target = SupplierTarget.objects.create(
                supplier_company=supplier,
                year=year,
                month=month,
                total_packs_target=result.total,
                weekly_targets=result.weekly,
                category_targets=result.category,
                notes=notes or "",
                created_by=actor,
            )
    except IntegrityError:
        raise DuplicateRecord(f"A target already exists for {supplier} {year}-{month:02d}.")

    logger.info(
        "Supplier target created: supplier=%s period=%s total=%d by=%s",
        supplier.pk, target.period, target.total_packs_target, getattr(actor, "pk", None),
    )
    _warn_mismatch(target, result)
    return target


@transaction.atomic
def update_target(supplier_id, year: int, month: int, patch: dict, actor=None) -> SupplierTarget:
    """Apply ``patch`` to the target keyed by supplier and period."""
    _check_patch(patch, TARGET_MUTABLE_FIELDS)
    try:
        target = SupplierTarget.objects.select_for_update().get(
            supplier_company_id=supplier_id, year=year, month=month,
        )
    except (SupplierTarget.DoesNotExist, ValidationError, ValueError):
        raise TargetNotFound(f"No target for supplier {supplier_id} in {year}-{month}.")

    total = patch.get("total_packs_target", target.total_packs_target)
    weekly = patch.get("weekly_targets", target.weekly_targets)
    category = patch.get("category_targets", target.category_targets)
    result = _checked_target_maps(total, weekly, category)

    target.total_packs_target = result.total
    target.weekly_targets = result.weekly
    target.category_targets = result.category
    if "notes" in patch:
        target.notes = patch["notes"] or ""
    target.save()

    logger.info(
        "Supplier target updated: supplier=%s period=%s fields=%s by=%s",
        target.supplier_company_id, target.period, ",".join(sorted(patch)), getattr(actor, "pk", None),
    )
    _warn_mismatch(target, result)
    return target


def get_target(target_id) -> SupplierTarget:
    return _lookup(SupplierTarget, TargetNotFound, pk=target_id)


@transaction.atomic
def delete_target(target_id) -> None:
    target = get_target(target_id)
    period = target.period
    supplier_id = target.supplier_company_id
    target.delete()
    logger.info("Supplier target deleted: supplier=%s period=%s", supplier_id, period)


def list_targets(supplier_id=None, year=None, month=None):
    qs = SupplierTarget.objects.select_related("supplier_company")
    if supplier_id is not None:
        qs = qs.filter(supplier_company_id=supplier_id)
    if year is not None:
        qs = qs.filter(year=year)
    if month is not None:
        qs = qs.filter(month=month)
    return qs


def targets_for_supplier(supplier_id):
    supplier = get_supplier(supplier_id)
    return list_targets(supplier_id=supplier.pk)


# ------------------------------------------------------------------
# Incentives
# ------------------------------------------------------------------

def _checked_amounts(percentage, actual_paid):
    percentage = _check_places(validate_percentage(percentage), "incentive_percentage")
    if actual_paid is not None:
        actual_paid = _check_places(validate_amount(actual_paid), "actual_incentive_paid")
    return percentage, actual_paid


@transaction.atomic
def create_incentive(
    *,
    supplier_id,
    year: int,
    month: int,
    incentive_percentage,
    actual_incentive_paid=None,
    notes: str = "",
    actor=None,
) -> SupplierIncentive:
    supplier = get_supplier(supplier_id)
    _check_period(year, month)
    percentage, actual_paid = _checked_amounts(incentive_percentage, actual_incentive_paid)

    if SupplierIncentive.objects.filter(supplier_company=supplier, year=year, month=month).exists():
        raise DuplicateRecord(f"An incentive already exists for {supplier} {year}-{month:02d}.")

    try:
        with transaction.atomic():
            incentive = SupplierIncentive.objects.create(
                supplier_company=supplier,
                year=year,
                month=month,
                incentive_percentage=percentage,
                actual_incentive_paid=actual_paid,
                notes=notes or "",
                created_by=actor,
            )
    except IntegrityError:
        raise DuplicateRecord(f"An incentive already exists for {supplier} {year}-{month:02d}.")

    logger.info(
        "Supplier incentive created: supplier=%s period=%s percentage=%s by=%s",
        supplier.pk, incentive.period, percentage, getattr(actor, "pk", None),
    )
    return incentive


@transaction.atomic
def update_incentive(supplier_id, year: int, month: int, patch: dict, actor=None) -> SupplierIncentive:
    _check_patch(patch, INCENTIVE_MUTABLE_FIELDS)
    try:
        incentive = SupplierIncentive.objects.select_for_update().get(
            supplier_company_id=supplier_id, year=year, month=month,
        )
    except (SupplierIncentive.DoesNotExist, ValidationError, ValueError):
        raise IncentiveNotFound(f"No incentive for supplier {supplier_id} in {year}-{month}.")

    percentage, actual_paid = _checked_amounts(
        patch.get("incentive_percentage", incentive.incentive_percentage),
        patch.get("actual_incentive_paid", incentive.actual_incentive_paid),
    )
    incentive.incentive_percentage = percentage
    incentive.actual_incentive_paid = actual_paid
    if "notes" in patch:
        incentive.notes = patch["notes"] or ""
    incentive.save()

    logger.info(
        "Supplier incentive updated: supplier=%s period=%s fields=%s by=%s",
        incentive.supplier_company_id, incentive.period, ",".join(sorted(patch)), getattr(actor, "pk", None),
    )
    return incentive


def get_incentive(incentive_id) -> SupplierIncentive:
    return _lookup(SupplierIncentive, IncentiveNotFound, pk=incentive_id)


@transaction.atomic
def delete_incentive(incentive_id) -> None:
    incentive = get_incentive(incentive_id)
    period = incentive.period
    supplier_id = incentive.supplier_company_id
    incentive.delete()
    logger.info("Supplier incentive deleted: supplier=%s period=%s", supplier_id, period)


def list_incentives(supplier_id=None, year=None, month=None):
    qs = SupplierIncentive.objects.select_related("supplier_company")
    if supplier_id is not None:
        qs = qs.filter(supplier_company_id=supplier_id)
    if year is not None:
        qs = qs.filter(year=year)
    if month is not None:
        qs = qs.filter(month=month)
    return qs


def incentives_for_supplier(supplier_id, year=None, month=None):
    supplier = get_supplier(supplier_id)
    return list_incentives(supplier_id=supplier.pk, year=year, month=month)


def build_incentive_report(incentive: SupplierIncentive) -> IncentiveReport:
    """Revenue for the incentive's month, the expected incentive and its variance."""
    summary = aggregate_revenue(
        incentive.supplier_company_id,
        PeriodFilter.for_month(incentive.year, incentive.month),
    )
    return IncentiveReport.build(
        incentive.incentive_percentage,
        summary.total_revenue,
        summary.total_orders,
        incentive.actual_incentive_paid,
    )
