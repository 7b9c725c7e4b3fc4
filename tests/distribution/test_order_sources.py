from datetime import date
from decimal import Decimal

import pytest

from distribution.models import DistributionOrder
from distribution.services import orders_for_supplier, settled_orders
from targets.periods import PeriodFilter


@pytest.mark.django_db
def test_settled_orders_exclude_unpaid_and_cancelled(supplier, make_order):
    paid = make_order(supplier, "100.00", date(2025, 3, 1))
    make_order(supplier, "100.00", date(2025, 3, 1), payment_status=DistributionOrder.PaymentStatus.PENDING)
    make_order(supplier, "100.00", date(2025, 3, 1), status=DistributionOrder.Status.CANCELLED)

    assert list(settled_orders()) == [paid]


@pytest.mark.django_db
def test_orders_for_supplier_uses_creation_month(supplier, other_supplier, make_order):
    march = make_order(supplier, "100.00", date(2025, 3, 31))
    make_order(supplier, "100.00", date(2025, 4, 1))
    make_order(other_supplier, "100.00", date(2025, 3, 15))

    orders = orders_for_supplier(supplier.pk, PeriodFilter.for_month(2025, 3))

    assert list(orders) == [march]


@pytest.mark.django_db
def test_order_item_total_and_balance(supplier, csd_product, make_order):
    order = make_order(supplier, "35000.00", date(2025, 3, 1), items=[(csd_product, 10)])
    order.amount_paid = Decimal("20000.00")

    item = order.items.get()
    assert item.total_price == Decimal("35000.00")
    assert order.balance == Decimal("15000.00")
