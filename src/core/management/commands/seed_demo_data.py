"""Seed a demo jewellery chain: showrooms, staff, customers and sales."""
import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from analytics.price_ranges import PRICE_RANGE_BUCKETS
from analytics.records import CategoryType, LeadStatus


class Command(BaseCommand):
    help = "Seed an enterprise with showrooms, staff, customers and sales transactions"

    DEMO_PASSWORD = "demo12345!"

    SHOWROOMS = [
        {"code": "SR-BLR-01", "name": "MG Road", "city": "Bengaluru", "state": "Karnataka"},
        {"code": "SR-MUM-01", "name": "Linking Road", "city": "Mumbai", "state": "Maharashtra"},
    ]

    DEMO_USERS = [
        {"email": "admin@jewelcrm.test", "first_name": "Anita", "last_name": "Menon", "role": "admin"},
        {"email": "manager.blr@jewelcrm.test", "first_name": "Rahul", "last_name": "Nair", "role": "manager", "showroom": "SR-BLR-01"},
        {"email": "manager.mum@jewelcrm.test", "first_name": "Sneha", "last_name": "Joshi", "role": "manager", "showroom": "SR-MUM-01"},
        {"email": "sales1.blr@jewelcrm.test", "first_name": "Kiran", "last_name": "Rao", "role": "salesperson", "showroom": "SR-BLR-01"},
        {"email": "sales2.blr@jewelcrm.test", "first_name": "Divya", "last_name": "Shetty", "role": "salesperson", "showroom": "SR-BLR-01"},
        {"email": "sales1.mum@jewelcrm.test", "first_name": "Arjun", "last_name": "Patil", "role": "salesperson", "showroom": "SR-MUM-01"},
        {"email": "sales2.mum@jewelcrm.test", "first_name": "Pooja", "last_name": "Desai", "role": "salesperson", "showroom": "SR-MUM-01"},
    ]

    FIRST_NAMES = ["Aarav", "Isha", "Vivaan", "Diya", "Kabir", "Ananya", "Rohan", "Saanvi", "Aditya", "Meera"]
    LAST_NAMES = ["Sharma", "Iyer", "Reddy", "Kulkarni", "Gupta", "Pillai", "Mehta", "Bose"]
    LEAD_SOURCES = ["Walk-in", "Instagram", "Referral", "Website", "Exhibition"]
    PRODUCTS = {
        CategoryType.DIAMOND: ["Solitaire Ring", "Diamond Necklace", "Tennis Bracelet", "Stud Earrings"],
        CategoryType.GOLD: ["Gold Chain", "Bangles", "Mangalsutra", "Jhumkas"],
        CategoryType.POLKI: ["Polki Choker", "Polki Maang Tikka", "Bridal Set"],
    }
    GOLD_CATEGORIES = ["22K", "18K", "Temple", "Antique"]
    POLKI_CATEGORIES = ["Bridal", "Festive", "Light Weight"]

    def add_arguments(self, parser):
        parser.add_argument("--customers", type=int, default=60, help="Customers to create")
        parser.add_argument("--days", type=int, default=400, help="Spread customers and sales over this many days")
        parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducible data")
        parser.add_argument("--flush", action="store_true", help="Delete existing demo customers and sales first")

    def handle(self, *args, **options):
        rng = random.Random(options["seed"])

        with transaction.atomic():
            if options["flush"]:
                self.stdout.write("Flushing demo customers and sales...")
                self._flush()

            enterprise = self._create_enterprise()
            showrooms = self._create_showrooms(enterprise)
            users = self._create_users(enterprise, showrooms)
            salespeople = [u for u in users if u.role == "salesperson"]
            customers = self._create_customers(rng, salespeople, options["customers"], options["days"])
            transactions = self._create_transactions(rng, customers)

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: {len(showrooms)} showrooms, {len(users)} users, "
            f"{len(customers)} customers, {transactions} transactions"
        ))

    def _flush(self):
        from customers.models import Customer
        from sales.models import SalesTransaction

        SalesTransaction.objects.filter(showroom__code__in=[s["code"] for s in self.SHOWROOMS]).delete()
        Customer.objects.filter(assigned_showroom__code__in=[s["code"] for s in self.SHOWROOMS]).delete()

    def _create_enterprise(self):
        from showrooms.models import Enterprise

        enterprise, created = Enterprise.objects.get_or_create(
            code="ENT-DEMO",
            defaults={"name": "Demo Jewellers", "currency": "INR", "email": "contact@jewelcrm.test"},
        )
        if created:
            self.stdout.write(f"  Enterprise: {enterprise.name}")
        return enterprise

    def _create_showrooms(self, enterprise):
        from showrooms.models import Showroom

        showrooms = {}
        for data in self.SHOWROOMS:
            showroom, created = Showroom.objects.get_or_create(
                code=data["code"],
                defaults={**data, "enterprise": enterprise},
            )
            if created:
                self.stdout.write(f"  Showroom: {showroom}")
            showrooms[showroom.code] = showroom
        return showrooms

    def _create_users(self, enterprise, showrooms):
        from accounts.models import User

        managers = {}
        users = []
        # Managers first so salespeople can point at them.
        for ud in sorted(self.DEMO_USERS, key=lambda u: u["role"] != "manager"):
            showroom = showrooms.get(ud.get("showroom"))
            user, created = User.objects.get_or_create(
                email=ud["email"],
                defaults={
                    "first_name": ud["first_name"],
                    "last_name": ud["last_name"],
                    "role": ud["role"],
                    "enterprise": enterprise,
                    "assigned_showroom": showroom,
                    "supervising_manager": managers.get(ud.get("showroom")) if ud["role"] == "salesperson" else None,
                },
            )
            if created:
                user.set_password(self.DEMO_PASSWORD)
                user.save(update_fields=["password"])
                self.stdout.write(f"  User: {user.email} ({user.role})")

            if ud["role"] == "manager" and showroom is not None:
                managers[showroom.code] = user
                if showroom.manager_id != user.id:
                    showroom.manager = user
                    showroom.save(update_fields=["manager", "updated_at"])
            users.append(user)
        return users

    def _interest(self, rng, category_type):
        products = []
        for name in rng.sample(self.PRODUCTS[category_type], k=rng.randint(1, 2)):
            product = {"product_name": name, "price_range": rng.choice(PRICE_RANGE_BUCKETS)}
            if category_type is CategoryType.DIAMOND:
                product["diamond_solitaire"] = name == "Solitaire Ring"
                product["diamond_fancy"] = rng.random() < 0.2
            elif category_type is CategoryType.GOLD:
                product["gold_internal_categories"] = rng.sample(self.GOLD_CATEGORIES, k=1)
            else:
                product["polki_categories"] = rng.sample(self.POLKI_CATEGORIES, k=1)
            products.append(product)
        return {
            "category_type": category_type.value,
            "products": products,
            "customer_preferences": {
                "design_selected": rng.random() < 0.3,
                "wants_more_discount": rng.random() < 0.35,
                "checking_other_jewellers": rng.random() < 0.25,
                "felt_less_variety": rng.random() < 0.2,
                "others": "",
            },
        }

    def _create_customers(self, rng, salespeople, count, days):
        from customers.models import Customer

        if not salespeople:
            return []
        now = timezone.now()
        statuses = [s.value for s in LeadStatus]
        customers = []
        for _ in range(count):
            salesperson = rng.choice(salespeople)
            status = rng.choice(statuses)
            categories = rng.sample(list(CategoryType), k=rng.randint(0, 2))
            purchase = None
            if status == LeadStatus.CLOSED_WON.value or rng.random() < 0.1:
                purchase = Decimal(rng.randrange(20_000, 900_000, 500))
            customer = Customer.objects.create(
                full_name=f"{rng.choice(self.FIRST_NAMES)} {rng.choice(self.LAST_NAMES)}",
                phone_number=f"9{rng.randrange(10**8, 10**9)}",
                lead_status=status,
                lead_source=rng.choice(self.LEAD_SOURCES),
                interest_categories_json=[self._interest(rng, c) for c in categories] or None,
                purchase_amount=purchase,
                follow_up_date=(now + timedelta(days=rng.randint(-5, 20))).date() if rng.random() < 0.4 else None,
                assigned_salesperson=salesperson,
                assigned_showroom=salesperson.assigned_showroom,
            )
            created_at = now - timedelta(days=rng.randint(0, days), hours=rng.randint(0, 10))
            Customer.objects.filter(pk=customer.pk).update(created_at=created_at)
            customer.created_at = created_at
            customers.append(customer)
        return customers

    def _create_transactions(self, rng, customers):
        from sales.models import SalesTransaction

        now = timezone.now()
        rows = [
            SalesTransaction(
                showroom=c.assigned_showroom,
                customer=c,
                salesperson=c.assigned_salesperson,
                total_amount=c.purchase_amount,
                transaction_date=min(c.created_at + timedelta(days=rng.randint(0, 14)), now),
            )
            for c in customers
            if c.purchase_amount and c.assigned_showroom is not None
        ]
        SalesTransaction.objects.bulk_create(rows)
        return len(rows)
