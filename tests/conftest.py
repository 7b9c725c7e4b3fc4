from datetime import datetime
from decimal import Decimal
from itertools import count

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import User
from distribution.models import DistributionOrder, DistributionOrderItem
from suppliers.models import Product, ProductCategory, SupplierCompany


@pytest.fixture
def super_admin(db):
    return User.objects.create_user(
        email="superadmin@test.com",
        password="testpass123",
        first_name="Super",
        last_name="Admin",
        role=User.Role.SUPER_ADMIN,
    )


@pytest.fixture
def distribution_admin(db):
    return User.objects.create_user(
        email="distadmin@test.com",
        password="testpass123",
        first_name="Distribution",
        last_name="Admin",
        role=User.Role.DISTRIBUTION_ADMIN,
    )


@pytest.fixture
def sales_rep(db):
    return User.objects.create_user(
        email="salesrep@test.com",
        password="testpass123",
        first_name="Sales",
        last_name="Rep",
        role=User.Role.DISTRIBUTION_SALES_REP,
    )


@pytest.fixture
def transport_staff(db):
    return User.objects.create_user(
        email="transport@test.com",
        password="testpass123",
        first_name="Transport",
        last_name="Staff",
        role=User.Role.TRANSPORT_STAFF,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(distribution_admin):
    client = APIClient()
    client.force_authenticate(user=distribution_admin)
    return client


@pytest.fixture
def sales_rep_client(sales_rep):
    client = APIClient()
    client.force_authenticate(user=sales_rep)
    return client


@pytest.fixture
def supplier(db):
    return SupplierCompany.objects.create(
        name="Nigerian Bottling Company",
        code="NBC",
        contact_person="Ada Obi",
        phone="+2348012345678",
        email="sales@nbc.test",
        payment_terms=SupplierCompany.PaymentTerms.NET_30,
    )


@pytest.fixture
def other_supplier(db):
    return SupplierCompany.objects.create(name="Seven-Up Bottling", code="7UP")


@pytest.fixture
def csd_product(supplier):
    return Product.objects.create(
        supplier_company=supplier,
        product_no="NBC-CSD-001",
        name="Coke 50cl x12",
        category=ProductCategory.CSD,
        packs_per_pallet=80,
        price_per_pack=Decimal("3500.00"),
    )


@pytest.fixture
def water_product(supplier):
    return Product.objects.create(
        supplier_company=supplier,
        product_no="NBC-WAT-001",
        name="Eva Water 75cl x12",
        category=ProductCategory.WATER,
        packs_per_pallet=100,
        price_per_pack=Decimal("1800.00"),
    )


@pytest.fixture
def make_order(db):
    """Create a settled order for ``supplier`` created on the given day at noon."""
    numbers = count(1)

    def _make_order(
        supplier,
        final_amount,
        created,
        *,
        total_packs=0,
        payment_status=DistributionOrder.PaymentStatus.CONFIRMED,
        status=DistributionOrder.Status.DELIVERED,
        items=(),
    ):
        if not isinstance(created, datetime):
            created = datetime(created.year, created.month, created.day, 12, 0)
        order = DistributionOrder.objects.create(
            order_number=f"DO-{next(numbers):05d}",
            supplier_company=supplier,
            total_packs=total_packs,
            original_amount=Decimal(final_amount),
            final_amount=Decimal(final_amount),
            amount_paid=Decimal(final_amount),
            payment_status=payment_status,
            status=status,
            created_at=timezone.make_aware(created),
        )
        for product, quantity in items:
            DistributionOrderItem.objects.create(
                order=order,
                product=product,
                quantity=quantity,
                unit_price=product.price_per_pack,
            )
        return order

    return _make_order
