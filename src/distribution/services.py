"""Read-side queries over distribution orders."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .models import DistributionOrder

if TYPE_CHECKING:
    from targets.periods import PeriodFilter


def settled_orders():
    """Orders that count as realised revenue: payment confirmed and not cancelled."""
    return (
        DistributionOrder.objects
        .filter(payment_status=DistributionOrder.PaymentStatus.CONFIRMED)
        .exclude(status=DistributionOrder.Status.CANCELLED)
    )


def orders_for_supplier(supplier_id, period: "PeriodFilter"):
    """Settled orders of one supplier restricted to ``period`` by creation timestamp."""
    return settled_orders().filter(
        supplier_company_id=supplier_id,
        **period.lookups("created_at"),
    )
