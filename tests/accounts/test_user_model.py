import pytest

from accounts.models import User


@pytest.mark.django_db
def test_create_user_normalizes_email_and_hashes_password():
    user = User.objects.create_user(email="Staff@Example.COM", password="testpass123", first_name="Staff")

    assert user.email == "Staff@example.com"
    assert user.check_password("testpass123")
    assert user.role == User.Role.SALESPERSON
    assert user.is_approved


def test_create_user_requires_email():
    with pytest.raises(ValueError):
        User.objects.create_user(email="", password="x")


@pytest.mark.django_db
def test_create_superuser_defaults_to_admin():
    user = User.objects.create_superuser(email="root@test.com", password="x", first_name="Root")

    assert user.is_superuser and user.is_staff
    assert user.is_admin


@pytest.mark.django_db
def test_role_querysets_only_return_approved_staff(admin_user, manager_user, sales_user, enterprise):
    User.objects.create_user(
        email="pending@test.com",
        password="x",
        first_name="Pending",
        role=User.Role.MANAGER,
        status=User.Status.PENDING_APPROVAL,
        enterprise=enterprise,
    )

    assert list(User.objects.managers()) == [manager_user]
    assert list(User.objects.salespeople()) == [sales_user]
    assert sales_user.is_salesperson and not sales_user.is_manager
    assert list(manager_user.team_members.all()) == [sales_user]
    assert str(manager_user) == "Manager User"
