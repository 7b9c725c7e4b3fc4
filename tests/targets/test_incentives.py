import pickle
from decimal import Decimal

import pytest

from targets.exceptions import TargetValidationError
from targets.incentives import (
    DIVISION_UNDEFINED,
    IncentiveReport,
    calculate_incentive,
    reconcile,
)


class TestCalculateIncentive:
    def test_percentage_of_revenue(self):
        assert calculate_incentive(Decimal("2.5"), Decimal("1000000")) == Decimal("25000.00")

    def test_rounds_half_up_to_cents(self):
        # 1% of 0.50 is 0.005
        assert calculate_incentive("1", "0.50") == Decimal("0.01")

    def test_zero_revenue(self):
        assert calculate_incentive(3, 0) == Decimal("0.00")

    def test_float_inputs_use_their_decimal_text(self):
        assert calculate_incentive(2.5, 1000000) == Decimal("25000.00")

    @pytest.mark.parametrize("percentage", [Decimal("-0.01"), Decimal("100.01"), "abc", None, True, "NaN"])
    def test_rejects_bad_percentage(self, percentage):
        with pytest.raises(TargetValidationError) as excinfo:
            calculate_incentive(percentage, Decimal("1000"))
        assert excinfo.value.field == "incentive_percentage"

    def test_rejects_negative_revenue(self):
        with pytest.raises(TargetValidationError):
            calculate_incentive(Decimal("2"), Decimal("-1"))


class TestReconcile:
    def test_overpayment_is_positive(self):
        result = reconcile(Decimal("25000.00"), Decimal("27000.00"))

        assert result.variance == Decimal("2000.00")
        assert result.variance_percentage == Decimal("8.00")

    def test_underpayment_is_negative(self):
        result = reconcile(Decimal("25000.00"), Decimal("23000.00"))

        assert result.variance == Decimal("-2000.00")
        assert result.variance_percentage == Decimal("-8.00")

    def test_percentage_is_rounded_to_two_places(self):
        result = reconcile(Decimal("45000.00"), Decimal("50000.00"))

        assert result.variance_percentage == Decimal("11.11")

    def test_without_actual_payment(self):
        result = reconcile(Decimal("25000.00"))

        assert result.variance is None
        assert result.variance_percentage is None

    def test_zero_calculated_returns_sentinel(self):
        result = reconcile(Decimal("0.00"), Decimal("500.00"))

        assert result.variance == Decimal("500.00")
        assert result.variance_percentage is DIVISION_UNDEFINED

    def test_sentinel_is_falsy_singleton(self):
        assert not DIVISION_UNDEFINED
        assert repr(DIVISION_UNDEFINED) == "DIVISION_UNDEFINED"
        assert pickle.loads(pickle.dumps(DIVISION_UNDEFINED)) is DIVISION_UNDEFINED


class TestIncentiveReport:
    def test_report_without_payment(self):
        report = IncentiveReport.build(Decimal("3.00"), Decimal("1500000"), 3)

        assert report.calculated_incentive == Decimal("45000.00")
        assert report.as_dict() == {
            "total_revenue": "1500000.00",
            "total_orders": 3,
            "calculated_incentive": "45000.00",
            "variance": None,
            "variance_percentage": None,
            "variance_percentage_defined": True,
        }

    def test_report_for_zero_revenue_month(self):
        report = IncentiveReport.build(Decimal("3.00"), Decimal("0"), 0, Decimal("1000.00"))

        data = report.as_dict()
        assert data["variance"] == "1000.00"
        assert data["variance_percentage"] is None
        assert data["variance_percentage_defined"] is False
