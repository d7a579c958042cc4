import pytest
from django.db import DatabaseError

from accounts.models import User


@pytest.mark.django_db
def test_admin_dashboard_returns_kpis(client, admin_user, three_customers):
    client.force_login(admin_user)

    response = client.get("/api/v1/dashboards/admin/")

    assert response.status_code == 200
    data = response.json()
    assert data["kpis"]["open_opportunities"] == 2
    assert data["kpis"]["active_pipeline_value"] == "150000.00"
    assert data["kpis"]["conversion_rate"] == "33.3"
    assert "no-store" in response["Cache-Control"]


@pytest.mark.django_db
def test_manager_dashboard_for_manager(client, manager_user, three_customers):
    client.force_login(manager_user)

    response = client.get("/api/v1/dashboards/manager/")

    assert response.status_code == 200
    assert response.json()["total_team_customers"] == 3


@pytest.mark.django_db
def test_salesperson_dashboard_for_salesperson(client, sales_user, three_customers):
    client.force_login(sales_user)

    response = client.get("/api/v1/dashboards/salesperson/")

    assert response.status_code == 200
    data = response.json()
    assert data["total_customers"] == 3
    assert data["pipeline_value"] == "150000.00"


@pytest.mark.django_db
def test_dashboard_returns_retryable_503_on_database_error(client, admin_user, monkeypatch):
    def boom(user):
        raise DatabaseError("connection lost")

    monkeypatch.setattr("reports.services.build_admin_dashboard", boom)
    client.force_login(admin_user)

    response = client.get("/api/v1/dashboards/admin/")

    assert response.status_code == 503
    assert response.json() == {"detail": "Failed to load dashboard data.", "retryable": True}


@pytest.mark.django_db
def test_converted_revenue_defaults_to_ytd(client, admin_user, three_customers):
    client.force_login(admin_user)

    response = client.get("/api/v1/reports/converted-revenue/")

    assert response.status_code == 200
    assert response.json()["period"] == "YTD"


@pytest.mark.django_db
def test_converted_revenue_accepts_period(client, admin_user):
    client.force_login(admin_user)

    response = client.get("/api/v1/reports/converted-revenue/", {"period": "mtd"})

    assert response.status_code == 200
    data = response.json()
    assert data["period"] == "MTD"
    assert data["label"]


@pytest.mark.django_db
def test_converted_revenue_rejects_invalid_period(client, admin_user):
    client.force_login(admin_user)

    response = client.get("/api/v1/reports/converted-revenue/", {"period": "QTD"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid period. Use WTD, MTD or YTD."


@pytest.mark.django_db
def test_reports_overview(client, admin_user, three_customers):
    client.force_login(admin_user)

    response = client.get("/api/v1/reports/overview/")

    assert response.status_code == 200
    data = response.json()
    assert data["total_customers"] == 3
    assert data["lead_conversion_rate"] == "33.3"
    assert "no-store" in response["Cache-Control"]


@pytest.mark.django_db
def test_superuser_without_role_can_open_admin_dashboard(client, enterprise):
    root = User.objects.create_superuser(email="root@test.com", password="testpass123", first_name="Root")
    client.force_login(root)

    assert client.get("/api/v1/dashboards/admin/").status_code == 200
