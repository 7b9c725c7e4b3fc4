"""Incentive arithmetic: expected incentive from revenue and its reconciliation
against what the supplier actually paid.

All amounts are ``Decimal`` rounded to the currency's minor unit (0.01) with
half-up rounding. A variance percentage against a zero calculated incentive is
reported as ``DIVISION_UNDEFINED`` rather than raised.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import NamedTuple

from targets.exceptions import TargetValidationError

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


class _DivisionUndefined:
    """Marker for a ratio whose denominator is zero."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "DIVISION_UNDEFINED"

    def __reduce__(self):
        return (_DivisionUndefined, ())


DIVISION_UNDEFINED = _DivisionUndefined()


def _to_decimal(value, field: str) -> Decimal:
    if isinstance(value, bool):
        raise TargetValidationError(f"{field} must be a number.", field=field)
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise TargetValidationError(f"{field} must be a number.", field=field)
    if not result.is_finite():
        raise TargetValidationError(f"{field} must be a finite number.", field=field)
    return result


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_percentage(percentage) -> Decimal:
    percentage = _to_decimal(percentage, "incentive_percentage")
    if percentage < 0 or percentage > HUNDRED:
        raise TargetValidationError(
            "Incentive percentage must be between 0 and 100.",
            field="incentive_percentage",
        )
    return percentage


def validate_amount(amount, field: str = "actual_incentive_paid") -> Decimal:
    amount = _to_decimal(amount, field)
    if amount < 0:
        raise TargetValidationError(f"{field} cannot be negative.", field=field)
    return amount


def calculate_incentive(percentage, revenue) -> Decimal:
    """``revenue * percentage / 100`` rounded half-up to 2 decimal places."""
    percentage = validate_percentage(percentage)
    revenue = validate_amount(revenue, "revenue")
    return quantize_money(revenue * percentage / HUNDRED)


class Reconciliation(NamedTuple):
    variance: Decimal | None
    variance_percentage: Decimal | _DivisionUndefined | None


def reconcile(calculated, actual_paid=None) -> Reconciliation:
    """Compare the paid incentive with the calculated one.

    A positive variance means the supplier paid more than calculated. Without
    an actual payment both outputs are ``None``.
    """
    if actual_paid is None:
        return Reconciliation(None, None)
    calculated = _to_decimal(calculated, "calculated_incentive")
    actual_paid = _to_decimal(actual_paid, "actual_incentive_paid")

    variance = quantize_money(actual_paid - calculated)
    if calculated == 0:
        return Reconciliation(variance, DIVISION_UNDEFINED)
    return Reconciliation(variance, quantize_money(variance / calculated * HUNDRED))


@dataclass(frozen=True)
class IncentiveReport:
    total_revenue: Decimal
    total_orders: int
    incentive_percentage: Decimal
    calculated_incentive: Decimal
    actual_incentive_paid: Decimal | None
    variance: Decimal | None
    variance_percentage: Decimal | _DivisionUndefined | None

    @classmethod
    def build(cls, percentage, total_revenue, total_orders, actual_paid=None) -> "IncentiveReport":
        calculated = calculate_incentive(percentage, total_revenue)
        reconciliation = reconcile(calculated, actual_paid)
        return cls(
            total_revenue=quantize_money(Decimal(total_revenue)),
            total_orders=total_orders,
            incentive_percentage=Decimal(percentage),
            calculated_incentive=calculated,
            actual_incentive_paid=actual_paid,
            variance=reconciliation.variance,
            variance_percentage=reconciliation.variance_percentage,
        )

    @property
    def variance_percentage_defined(self) -> bool:
        return self.variance_percentage is not DIVISION_UNDEFINED

    def as_dict(self) -> dict:
        def money(value):
            return None if value is None else str(value)

        percentage = self.variance_percentage
        return {
            "total_revenue": money(self.total_revenue),
            "total_orders": self.total_orders,
            "calculated_incentive": money(self.calculated_incentive),
            "variance": money(self.variance),
            "variance_percentage": None if percentage is DIVISION_UNDEFINED else money(percentage),
            "variance_percentage_defined": self.variance_percentage_defined,
        }
