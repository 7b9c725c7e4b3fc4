"""Reconciliation of a monthly pack target against its weekly and category splits.

Mismatched sums are reported through the returned flags. They only become an
error when the caller asks for ``strict`` reconciliation; negative or
non-integer pack counts and unknown category codes are always rejected.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from suppliers.models import ProductCategory
from targets.exceptions import InvalidCategoryError, TargetValidationError
from targets.periods import WEEK_SLOTS

CATEGORY_CODES = tuple(ProductCategory.values)


@dataclass(frozen=True)
class TargetValidation:
    total: int
    weekly: dict
    category: dict | None
    weekly_sum: int
    category_sum: int | None
    weekly_matches: bool
    category_matches: bool | None

    @property
    def is_reconciled(self) -> bool:
        return self.weekly_matches and self.category_matches is not False

    def mismatches(self) -> list[str]:
        messages = []
        if not self.weekly_matches:
            messages.append(
                f"Weekly targets add up to {self.weekly_sum} packs, total target is {self.total}."
            )
        if self.category_matches is False:
            messages.append(
                f"Category targets add up to {self.category_sum} packs, total target is {self.total}."
            )
        return messages

    def as_dict(self) -> dict:
        return {
            "weekly_sum": self.weekly_sum,
            "category_sum": self.category_sum,
            "weekly_matches": self.weekly_matches,
            "category_matches": self.category_matches,
        }


def pack_count(value, field: str) -> int:
    """Return ``value`` if it is a non-negative int; never coerce."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TargetValidationError(f"{field} must be a whole number of packs.", field=field)
    if value < 0:
        raise TargetValidationError(f"{field} cannot be negative.", field=field)
    return value


def normalize_weekly(weekly) -> dict:
    """Accept four counts as a sequence or as a week1..week4 mapping."""
    if isinstance(weekly, Mapping):
        if set(weekly) != set(WEEK_SLOTS):
            raise TargetValidationError(
                f"Weekly targets must have exactly the keys {', '.join(WEEK_SLOTS)}.",
                field="weekly_targets",
            )
        values = [weekly[slot] for slot in WEEK_SLOTS]
    elif isinstance(weekly, Sequence) and not isinstance(weekly, (str, bytes)):
        if len(weekly) != len(WEEK_SLOTS):
            raise TargetValidationError(
                f"Exactly {len(WEEK_SLOTS)} weekly targets are required.",
                field="weekly_targets",
            )
        values = list(weekly)
    else:
        raise TargetValidationError("Weekly targets must be a list or a mapping.", field="weekly_targets")

    return {
        slot: pack_count(value, f"weekly_targets.{slot}")
        for slot, value in zip(WEEK_SLOTS, values)
    }


def normalize_category(category) -> dict | None:
    if category is None:
        return None
    if not isinstance(category, Mapping):
        raise TargetValidationError("Category targets must be a mapping.", field="category_targets")

    unknown = sorted(str(code) for code in category if code not in CATEGORY_CODES)
    if unknown:
        raise InvalidCategoryError(
            f"Unknown category code(s): {', '.join(unknown)}. "
            f"Valid codes are {', '.join(CATEGORY_CODES)}.",
            field="category_targets",
        )
    return {
        code: pack_count(category[code], f"category_targets.{code}")
        for code in CATEGORY_CODES
        if code in category
    }


def category_opted_in(category) -> bool:
    """A category split counts only when at least one category has packs."""
    return bool(category) and any(category.values())


def validate_target(total, weekly, category=None, *, strict: bool = False) -> TargetValidation:
    total = pack_count(total, "total_packs_target")
    weekly = normalize_weekly(weekly)
    category = normalize_category(category)

    weekly_sum = sum(weekly.values())
    category_sum = sum(category.values()) if category is not None else None

    result = TargetValidation(
        total=total,
        weekly=weekly,
        category=category,
        weekly_sum=weekly_sum,
        category_sum=category_sum,
        weekly_matches=weekly_sum == total,
        category_matches=(category_sum == total) if category is not None else None,
    )
    if strict and not result.is_reconciled:
        field = "weekly_targets" if not result.weekly_matches else "category_targets"
        raise TargetValidationError(" ".join(result.mismatches()), field=field)
    return result
