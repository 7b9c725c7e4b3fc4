from io import StringIO

import pytest
from django.core.management import call_command

from distribution.models import DistributionOrder
from suppliers.models import SupplierCompany
from targets import services
from targets.models import SupplierIncentive, SupplierTarget


@pytest.mark.django_db
def test_seed_data_creates_reconciled_targets():
    out = StringIO()

    call_command("seed_data", year=2025, month=3, stdout=out)

    assert "Seed complete" in out.getvalue()
    assert SupplierCompany.objects.count() == 3
    assert DistributionOrder.objects.count() == 12
    assert SupplierTarget.objects.filter(year=2025, month=3).count() == 3
    assert SupplierIncentive.objects.filter(year=2025, month=3).count() == 3
    for target in SupplierTarget.objects.all():
        assert services.target_validation(target).is_reconciled


@pytest.mark.django_db
def test_seed_data_can_run_twice():
    call_command("seed_data", year=2025, month=3, stdout=StringIO())
    call_command("seed_data", year=2025, month=3, stdout=StringIO())

    assert DistributionOrder.objects.count() == 12
    assert SupplierTarget.objects.count() == 3


@pytest.mark.django_db
def test_seed_data_flush_clears_previous_month():
    call_command("seed_data", year=2025, month=2, stdout=StringIO())

    call_command("seed_data", "--flush", year=2025, month=3, stdout=StringIO())

    assert not SupplierTarget.objects.filter(month=2).exists()
    assert SupplierTarget.objects.filter(month=3).count() == 3
