import uuid
from datetime import date
from decimal import Decimal

import pytest

from distribution.models import DistributionOrder
from targets.exceptions import SupplierNotFound
from targets.periods import PeriodFilter
from targets.revenue import MonthlyRevenue, aggregate_revenue


@pytest.fixture
def march_orders(supplier, make_order):
    return [
        make_order(supplier, "500000.00", date(2025, 3, 3)),
        make_order(supplier, "700000.00", date(2025, 3, 12)),
        make_order(supplier, "300000.00", date(2025, 3, 28)),
    ]


@pytest.mark.django_db
class TestAggregateRevenue:
    def test_month_total(self, supplier, march_orders):
        summary = aggregate_revenue(supplier.pk, PeriodFilter.for_month(2025, 3))

        assert summary.total_revenue == Decimal("1500000.00")
        assert summary.total_orders == 3
        assert summary.breakdown == [MonthlyRevenue(2025, 3, Decimal("1500000.00"), 3)]

    def test_only_settled_orders_count(self, supplier, march_orders, make_order):
        make_order(
            supplier, "999.00", date(2025, 3, 5),
            payment_status=DistributionOrder.PaymentStatus.PENDING,
        )
        make_order(
            supplier, "888.00", date(2025, 3, 6),
            payment_status=DistributionOrder.PaymentStatus.PARTIAL,
        )
        make_order(
            supplier, "777.00", date(2025, 3, 7),
            status=DistributionOrder.Status.CANCELLED,
        )

        summary = aggregate_revenue(supplier.pk, PeriodFilter.for_month(2025, 3))

        assert summary.total_revenue == Decimal("1500000.00")
        assert summary.total_orders == 3

    def test_other_suppliers_and_months_are_excluded(self, supplier, other_supplier, march_orders, make_order):
        make_order(other_supplier, "400000.00", date(2025, 3, 10))
        make_order(supplier, "250000.00", date(2025, 4, 1))

        summary = aggregate_revenue(supplier.pk, PeriodFilter.for_month(2025, 3))

        assert summary.total_revenue == Decimal("1500000.00")

    def test_empty_period_is_zero(self, supplier):
        summary = aggregate_revenue(supplier.pk, PeriodFilter.for_month(2025, 3))

        assert summary.total_revenue == Decimal("0.00")
        assert summary.total_orders == 0
        assert summary.breakdown == []

    def test_all_time_breakdown_is_monthly_and_ordered(self, supplier, make_order):
        make_order(supplier, "100.00", date(2025, 3, 2))
        make_order(supplier, "200.00", date(2024, 12, 30))
        make_order(supplier, "50.00", date(2025, 3, 20))
        make_order(supplier, "25.00", date(2025, 1, 15))

        summary = aggregate_revenue(supplier.pk)

        assert summary.total_revenue == Decimal("375.00")
        assert summary.total_orders == 4
        assert summary.breakdown == [
            MonthlyRevenue(2024, 12, Decimal("200.00"), 1),
            MonthlyRevenue(2025, 1, Decimal("25.00"), 1),
            MonthlyRevenue(2025, 3, Decimal("150.00"), 2),
        ]

    def test_range_bounds_are_inclusive_and_may_be_open(self, supplier, make_order):
        make_order(supplier, "100.00", date(2025, 1, 31))
        make_order(supplier, "200.00", date(2025, 2, 1))
        make_order(supplier, "300.00", date(2025, 2, 28))

        bounded = aggregate_revenue(supplier.pk, PeriodFilter.between(date(2025, 2, 1), date(2025, 2, 28)))
        open_start = aggregate_revenue(supplier.pk, PeriodFilter.between(end=date(2025, 2, 1)))
        open_end = aggregate_revenue(supplier.pk, PeriodFilter.between(start=date(2025, 2, 28)))

        assert bounded.total_revenue == Decimal("500.00")
        assert open_start.total_revenue == Decimal("300.00")
        assert open_end.total_revenue == Decimal("300.00")

    def test_year_filter(self, supplier, make_order):
        make_order(supplier, "100.00", date(2024, 12, 31))
        make_order(supplier, "200.00", date(2025, 6, 1))

        summary = aggregate_revenue(supplier.pk, PeriodFilter.for_year(2025))

        assert summary.total_revenue == Decimal("200.00")

    def test_repeated_calls_give_the_same_result(self, supplier, march_orders):
        period = PeriodFilter.for_month(2025, 3)

        assert aggregate_revenue(supplier.pk, period) == aggregate_revenue(supplier.pk, period)

    @pytest.mark.parametrize("supplier_id", [uuid.uuid4(), "not-a-uuid"])
    def test_unknown_supplier(self, supplier_id):
        with pytest.raises(SupplierNotFound):
            aggregate_revenue(supplier_id, PeriodFilter.all_time())

    def test_as_dict(self, supplier, march_orders):
        data = aggregate_revenue(supplier.pk, PeriodFilter.for_month(2025, 3)).as_dict()

        assert data["total_revenue"] == "1500000.00"
        assert data["breakdown"][0] == {
            "year": 2025, "month": 3, "revenue": "1500000.00", "order_count": 3,
        }
