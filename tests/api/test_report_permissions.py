import pytest

from accounts.models import User
from api.v1.permissions import IsActiveStaff, IsAdmin, IsManagerOrAdmin


class DummyRequest:
    def __init__(self, user):
        self.user = user


@pytest.mark.django_db
def test_role_permissions(admin_user, manager_user, sales_user):
    for permission, allowed in (
        (IsAdmin(), {admin_user}),
        (IsManagerOrAdmin(), {admin_user, manager_user}),
        (IsActiveStaff(), {admin_user, manager_user, sales_user}),
    ):
        for user in (admin_user, manager_user, sales_user):
            assert permission.has_permission(DummyRequest(user), None) is (user in allowed)


@pytest.mark.django_db
def test_pending_users_are_denied(enterprise):
    pending = User.objects.create_user(
        email="pending@test.com",
        password="testpass123",
        first_name="Pending",
        role=User.Role.ADMIN,
        status=User.Status.PENDING_APPROVAL,
        enterprise=enterprise,
    )
    assert IsActiveStaff().has_permission(DummyRequest(pending), None) is False
    assert IsAdmin().has_permission(DummyRequest(pending), None) is False


@pytest.mark.django_db
@pytest.mark.parametrize(
    "url",
    [
        "/api/v1/dashboards/admin/",
        "/api/v1/reports/converted-revenue/",
        "/api/v1/reports/overview/",
    ],
)
def test_admin_only_endpoints_forbid_salespeople_and_managers(client, manager_user, sales_user, url):
    for user in (manager_user, sales_user):
        client.force_login(user)
        assert client.get(url).status_code == 403


@pytest.mark.django_db
def test_manager_dashboard_forbids_salespeople(client, sales_user):
    client.force_login(sales_user)

    assert client.get("/api/v1/dashboards/manager/").status_code == 403
    assert client.get("/api/v1/reports/breakdowns/export/", {"report": "lead_sources"}).status_code == 403


@pytest.mark.django_db
def test_pending_user_cannot_open_any_dashboard(client, enterprise):
    pending = User.objects.create_user(
        email="pending.sales@test.com",
        password="testpass123",
        first_name="Pending",
        role=User.Role.SALESPERSON,
        status=User.Status.PENDING_APPROVAL,
        enterprise=enterprise,
    )
    client.force_login(pending)

    response = client.get("/api/v1/dashboards/salesperson/")

    assert response.status_code == 403
    assert response.json()["detail"] == "Your account is not active."


@pytest.mark.django_db
@pytest.mark.parametrize(
    "url",
    [
        "/api/v1/dashboards/admin/",
        "/api/v1/dashboards/manager/",
        "/api/v1/dashboards/salesperson/",
        "/api/v1/customers/",
    ],
)
def test_anonymous_requests_are_rejected(client, url):
    assert client.get(url).status_code in (401, 403)
