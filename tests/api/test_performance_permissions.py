import pytest
from rest_framework.test import APIClient

from accounts.models import User
from api.v1.permissions import CanManageSupplierPerformance, CanViewSupplierPerformance


class DummyRequest:
    def __init__(self, user, method="GET"):
        self.user = user
        self.method = method


@pytest.mark.django_db
@pytest.mark.parametrize(
    "role, can_view, can_write",
    [
        (User.Role.SUPER_ADMIN, True, True),
        (User.Role.DISTRIBUTION_ADMIN, True, True),
        (User.Role.DISTRIBUTION_SALES_REP, True, False),
        (User.Role.TRANSPORT_ADMIN, False, False),
        (User.Role.WAREHOUSE_ADMIN, False, False),
        (User.Role.CASHIER, False, False),
    ],
)
def test_role_capabilities(role, can_view, can_write):
    user = User.objects.create_user(
        email=f"{role.lower()}@test.com",
        password="testpass123",
        first_name="Role",
        last_name="User",
        role=role,
    )
    permission = CanManageSupplierPerformance()

    assert permission.has_permission(DummyRequest(user, "GET"), None) is can_view
    assert permission.has_permission(DummyRequest(user, "POST"), None) is can_write
    assert permission.has_permission(DummyRequest(user, "DELETE"), None) is can_write
    assert CanViewSupplierPerformance().has_permission(DummyRequest(user), None) is can_view


@pytest.mark.django_db
def test_superuser_is_allowed_whatever_the_role():
    user = User.objects.create_superuser(
        email="root@test.com",
        password="testpass123",
        first_name="Root",
        last_name="User",
        role=User.Role.TRANSPORT_STAFF,
    )

    assert CanManageSupplierPerformance().has_permission(DummyRequest(user, "PATCH"), None) is True


@pytest.mark.django_db
def test_anonymous_request_is_rejected(api_client):
    response = api_client.get("/api/v1/supplier-targets/")

    assert response.status_code == 403


@pytest.mark.django_db
def test_sales_rep_reads_but_cannot_write(sales_rep_client, supplier):
    assert sales_rep_client.get("/api/v1/supplier-targets/").status_code == 200
    assert sales_rep_client.get("/api/v1/supplier-incentives/").status_code == 200

    response = sales_rep_client.post(
        "/api/v1/supplier-targets/",
        {
            "supplier_company": str(supplier.pk),
            "year": 2025,
            "month": 3,
            "total_packs_target": 0,
            "weekly_targets": [0, 0, 0, 0],
        },
        format="json",
    )
    assert response.status_code == 403


@pytest.mark.django_db
def test_other_divisions_cannot_read(transport_staff):
    client = APIClient()
    client.force_authenticate(user=transport_staff)

    assert client.get("/api/v1/supplier-targets/").status_code == 403
    assert client.get("/api/v1/supplier-incentives/").status_code == 403
    assert client.get("/api/v1/supplier-companies/").status_code == 403


@pytest.mark.django_db
def test_supplier_company_crud(admin_client):
    response = admin_client.post(
        "/api/v1/supplier-companies/",
        {"name": "Rite Foods", "code": " rite ", "payment_terms": "NET_15"},
        format="json",
    )

    assert response.status_code == 201, response.content
    body = response.json()
    assert body["code"] == "RITE"
    assert body["product_count"] == 0

    listing = admin_client.get("/api/v1/supplier-companies/", {"search": "Rite"})
    assert listing.json()["count"] == 1


@pytest.mark.django_db
def test_readers_can_use_the_target_planning_tools(sales_rep_client, transport_staff):
    calendar = sales_rep_client.get("/api/v1/supplier-targets/working-days/", {"year": 2025, "month": 3})
    preview = sales_rep_client.post(
        "/api/v1/supplier-targets/validate/",
        {"total_packs_target": 100, "weekly_targets": [25, 25, 25, 25]},
        format="json",
    )

    assert calendar.status_code == 200
    assert preview.status_code == 200
    assert preview.json()["is_reconciled"] is True

    client = APIClient()
    client.force_authenticate(user=transport_staff)
    assert client.get("/api/v1/supplier-targets/working-days/", {"year": 2025, "month": 3}).status_code == 403
    assert client.post(
        "/api/v1/supplier-targets/validate/",
        {"total_packs_target": 100, "weekly_targets": [25, 25, 25, 25]},
        format="json",
    ).status_code == 403
