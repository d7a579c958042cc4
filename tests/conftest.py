from datetime import datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import User
from customers.models import Customer
from showrooms.models import Enterprise, Showroom


def interest(*price_ranges, category_type="Diamond", **preferences):
    """One stored interest-category entry with a product per price range."""
    return {
        "category_type": category_type,
        "products": [
            {"product_name": f"Item {i + 1}", "price_range": price_range}
            for i, price_range in enumerate(price_ranges)
        ],
        "customer_preferences": preferences,
    }


def aware(*args):
    return timezone.make_aware(datetime(*args))


@pytest.fixture
def enterprise(db):
    return Enterprise.objects.create(name="Tanishq Test", code="ENT-001")


@pytest.fixture
def other_enterprise(db):
    return Enterprise.objects.create(name="Other Jewels", code="ENT-002")


@pytest.fixture
def showroom(enterprise):
    return Showroom.objects.create(
        enterprise=enterprise,
        name="MG Road",
        code="SR-001",
        city="Bengaluru",
        state="Karnataka",
    )


@pytest.fixture
def other_showroom(other_enterprise):
    return Showroom.objects.create(
        enterprise=other_enterprise,
        name="Linking Road",
        code="SR-900",
        city="Mumbai",
        state="Maharashtra",
    )


@pytest.fixture
def admin_user(enterprise):
    return User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        first_name="Admin",
        last_name="User",
        role=User.Role.ADMIN,
        enterprise=enterprise,
    )


@pytest.fixture
def manager_user(enterprise, showroom):
    user = User.objects.create_user(
        email="manager@test.com",
        password="testpass123",
        first_name="Manager",
        last_name="User",
        role=User.Role.MANAGER,
        enterprise=enterprise,
        assigned_showroom=showroom,
    )
    showroom.manager = user
    showroom.save(update_fields=["manager", "updated_at"])
    return user


@pytest.fixture
def sales_user(enterprise, showroom, manager_user):
    return User.objects.create_user(
        email="sales@test.com",
        password="testpass123",
        first_name="Sales",
        last_name="User",
        role=User.Role.SALESPERSON,
        enterprise=enterprise,
        assigned_showroom=showroom,
        supervising_manager=manager_user,
        employee_id="EMP-001",
    )


@pytest.fixture
def other_sales_user(other_enterprise, other_showroom):
    return User.objects.create_user(
        email="other.sales@test.com",
        password="testpass123",
        first_name="Other",
        last_name="Seller",
        role=User.Role.SALESPERSON,
        enterprise=other_enterprise,
        assigned_showroom=other_showroom,
    )


@pytest.fixture
def make_customer(db):
    def _make(salesperson, showroom, created_at=None, **fields):
        fields.setdefault("full_name", "Test Customer")
        customer = Customer.objects.create(
            assigned_salesperson=salesperson,
            assigned_showroom=showroom,
            **fields,
        )
        if created_at is not None:
            Customer.objects.filter(pk=customer.pk).update(created_at=created_at)
            customer.refresh_from_db()
        return customer

    return _make


@pytest.fixture
def three_customers(make_customer, sales_user, showroom):
    """Open lead with interest, buyer without interest, Closed Won with interest."""
    created = aware(2024, 6, 10, 11, 0)
    return [
        make_customer(
            sales_user,
            showroom,
            created_at=created,
            full_name="Asha Rao",
            lead_source="Walk-in",
            interest_categories_json=[interest("1L-2L", wants_more_discount=True)],
        ),
        make_customer(
            sales_user,
            showroom,
            created_at=created,
            full_name="Vikram Shah",
            lead_source="Instagram",
            purchase_amount=Decimal("75000.00"),
        ),
        make_customer(
            sales_user,
            showroom,
            created_at=created,
            full_name="Meera Iyer",
            lead_source="Walk-in",
            lead_status=Customer.LeadStatus.CLOSED_WON,
            interest_categories_json=[interest("25K-50K", "50K-75K", category_type="Gold")],
        ),
    ]
