import pytest

from accounts.models import User
from customers.models import Customer
from customers.services import customer_record, load_customer_records, scoped_customers


@pytest.fixture
def scoped_setup(make_customer, sales_user, other_sales_user, showroom, other_showroom, manager_user):
    peer = User.objects.create_user(
        email="peer@test.com",
        password="testpass123",
        first_name="Peer",
        role=User.Role.SALESPERSON,
        enterprise=showroom.enterprise,
        assigned_showroom=showroom,
    )
    mine = make_customer(sales_user, showroom, full_name="Mine")
    peers = make_customer(peer, showroom, full_name="Peer's")
    foreign = make_customer(other_sales_user, other_showroom, full_name="Foreign")
    deleted = make_customer(sales_user, showroom, full_name="Deleted")
    deleted.soft_delete()
    return {"mine": mine, "peers": peers, "foreign": foreign}


def _names(qs):
    return sorted(qs.values_list("full_name", flat=True))


@pytest.mark.django_db
def test_salesperson_sees_only_own_alive_customers(scoped_setup, sales_user):
    assert _names(scoped_customers(sales_user)) == ["Mine"]


@pytest.mark.django_db
def test_manager_sees_team_customers(scoped_setup, manager_user):
    assert _names(scoped_customers(manager_user)) == ["Mine"]


@pytest.mark.django_db
def test_admin_sees_own_enterprise(scoped_setup, admin_user):
    assert _names(scoped_customers(admin_user)) == ["Mine", "Peer's"]


@pytest.mark.django_db
def test_admin_without_enterprise_sees_nothing(scoped_setup):
    orphan = User.objects.create_user(email="orphan@test.com", password="x", first_name="O", role=User.Role.ADMIN)
    assert scoped_customers(orphan).count() == 0


@pytest.mark.django_db
def test_superuser_sees_everything_alive(scoped_setup):
    root = User.objects.create_superuser(email="root@test.com", password="x", first_name="Root")
    assert _names(scoped_customers(root)) == ["Foreign", "Mine", "Peer's"]
    assert Customer.objects.count() == 4


@pytest.mark.django_db
def test_load_customer_records_parses_interests(three_customers):
    (record,) = load_customer_records(Customer.objects.filter(lead_source="Instagram"))
    assert record.interest_categories == ()
    assert str(record.purchase_amount) == "75000.00"

    walk_ins = load_customer_records(Customer.objects.filter(lead_source="Walk-in").order_by("full_name"))
    assert [r.interest_categories[0].category_type.value for r in walk_ins] == ["Diamond", "Gold"]
    assert walk_ins[1].is_closed_won


@pytest.mark.django_db
def test_customer_record_matches_bulk_loaded_record(three_customers):
    for customer in Customer.objects.all():
        (loaded,) = load_customer_records(Customer.objects.filter(pk=customer.pk))
        assert customer_record(customer) == loaded
