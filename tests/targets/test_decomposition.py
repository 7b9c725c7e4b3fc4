import pytest

from targets.decomposition import (
    CATEGORY_CODES,
    category_opted_in,
    normalize_weekly,
    validate_target,
)
from targets.exceptions import InvalidCategoryError, TargetValidationError


class TestValidateTarget:
    def test_even_weekly_split_matches(self):
        result = validate_target(1000, [250, 250, 250, 250])

        assert result.weekly_sum == 1000
        assert result.weekly_matches is True
        assert result.category_sum is None
        assert result.category_matches is None
        assert result.is_reconciled is True
        assert result.mismatches() == []

    def test_weekly_mismatch_is_reported_not_raised(self):
        result = validate_target(1000, [300, 300, 300, 300])

        assert result.weekly_sum == 1200
        assert result.weekly_matches is False
        assert result.is_reconciled is False
        assert result.mismatches() == [
            "Weekly targets add up to 1200 packs, total target is 1000."
        ]

    def test_strict_mode_raises_on_mismatch(self):
        with pytest.raises(TargetValidationError) as excinfo:
            validate_target(1000, [300, 300, 300, 300], strict=True)
        assert excinfo.value.field == "weekly_targets"

    def test_strict_mode_reports_category_mismatch(self):
        with pytest.raises(TargetValidationError) as excinfo:
            validate_target(1000, [250] * 4, {"CSD": 100}, strict=True)
        assert excinfo.value.field == "category_targets"

    def test_category_split(self):
        result = validate_target(1000, [250] * 4, {"CSD": 600, "WATER": 400})

        assert result.category == {"CSD": 600, "WATER": 400}
        assert result.category_sum == 1000
        assert result.category_matches is True

    def test_category_mismatch(self):
        result = validate_target(1000, [250] * 4, {"CSD": 600, "JUICE": 100})

        assert result.category_sum == 700
        assert result.category_matches is False
        assert result.weekly_matches is True
        assert result.is_reconciled is False

    def test_unknown_category_is_rejected(self):
        with pytest.raises(InvalidCategoryError) as excinfo:
            validate_target(1000, [250] * 4, {"CSD": 500, "BEER": 500})
        assert excinfo.value.field == "category_targets"
        assert "BEER" in str(excinfo.value)

    def test_invalid_category_is_a_validation_error(self):
        assert issubclass(InvalidCategoryError, TargetValidationError)

    def test_zero_total(self):
        result = validate_target(0, [0, 0, 0, 0])

        assert result.weekly_matches is True

    def test_as_dict(self):
        assert validate_target(100, [25] * 4).as_dict() == {
            "weekly_sum": 100,
            "category_sum": None,
            "weekly_matches": True,
            "category_matches": None,
        }

    @pytest.mark.parametrize("total", [-1, 10.5, "1000", None, True])
    def test_rejects_bad_total(self, total):
        with pytest.raises(TargetValidationError) as excinfo:
            validate_target(total, [0] * 4)
        assert excinfo.value.field == "total_packs_target"

    @pytest.mark.parametrize("value", [-5, 2.5, "10", None, False])
    def test_rejects_bad_weekly_count(self, value):
        with pytest.raises(TargetValidationError) as excinfo:
            validate_target(100, [25, value, 25, 25])
        assert excinfo.value.field == "weekly_targets.week2"

    def test_rejects_negative_category_count(self):
        with pytest.raises(TargetValidationError) as excinfo:
            validate_target(100, [25] * 4, {"ED": -1})
        assert excinfo.value.field == "category_targets.ED"


class TestNormalizeWeekly:
    def test_sequence_becomes_week_slots(self):
        assert normalize_weekly((1, 2, 3, 4)) == {"week1": 1, "week2": 2, "week3": 3, "week4": 4}

    def test_mapping_is_accepted(self):
        weekly = {"week4": 4, "week3": 3, "week2": 2, "week1": 1}

        assert list(normalize_weekly(weekly)) == ["week1", "week2", "week3", "week4"]

    @pytest.mark.parametrize(
        "weekly",
        [
            [250, 250, 250],
            [250, 250, 250, 250, 0],
            {"week1": 1, "week2": 2, "week3": 3},
            {"week1": 1, "week2": 2, "week3": 3, "week5": 4},
            "1000",
            1000,
        ],
    )
    def test_rejects_wrong_shape(self, weekly):
        with pytest.raises(TargetValidationError) as excinfo:
            normalize_weekly(weekly)
        assert excinfo.value.field == "weekly_targets"


class TestCategoryOptIn:
    def test_catalog(self):
        assert CATEGORY_CODES == ("CSD", "ED", "WATER", "JUICE")

    @pytest.mark.parametrize(
        "category, expected",
        [
            (None, False),
            ({}, False),
            ({"CSD": 0, "ED": 0, "WATER": 0, "JUICE": 0}, False),
            ({"CSD": 0, "WATER": 10}, True),
        ],
    )
    def test_opted_in_only_with_some_packs(self, category, expected):
        assert category_opted_in(category) is expected
