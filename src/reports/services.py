"""Service functions for the reports app.

These functions fetch scoped rows and hand them to the ``analytics`` package
for every piece of arithmetic, so views stay thin and the same payloads can
be produced from Celery tasks or the API.
"""
import logging
from collections import Counter
from dataclasses import asdict
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from accounts.models import User
from analytics.breakdowns import (
    WALKOUT_REASONS,
    lead_source_breakdown,
    lowest_category_conversion,
    rank_showrooms,
    salesperson_performance,
    sum_by,
    top_by,
    top_walkout_reasons,
)
from analytics.kpis import KPIContext, compose_kpis, percentage_change
from analytics.periods import Period, period_window
from analytics.pipeline import format_rate, summarize_conversions
from analytics.records import CategoryType
from core.formatting import format_inr
from customers.models import Customer
from customers.services import load_customer_records, scoped_customers
from sales.services import load_transaction_records, scoped_transactions, sum_transactions
from showrooms.models import Showroom

logger = logging.getLogger("jewelcrm")

ZERO = Decimal("0.00")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _top_n():
    return getattr(settings, "DASHBOARD_TOP_N", 5)


def _currency():
    return getattr(settings, "CURRENCY_SYMBOL", "₹")


def _money(value):
    return str(Decimal(value or 0).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _display(value):
    return format_inr(value, _currency())


def _name(user):
    if user is None:
        return ""
    return user.get_full_name() or user.email


def _scoped_showrooms(user):
    qs = Showroom.objects.select_related("manager")
    if user.is_superuser:
        return qs
    if user.enterprise_id is None:
        return qs.none()
    return qs.filter(enterprise_id=user.enterprise_id)


def _scoped_staff(user):
    qs = User.objects.all()
    if user.is_superuser:
        return qs
    if user.enterprise_id is None:
        return qs.none()
    return qs.filter(enterprise_id=user.enterprise_id)


def _team(user):
    """Salespeople reporting to *user*; admins get every salesperson of the enterprise."""
    if user.role == User.Role.MANAGER and not user.is_superuser:
        return User.objects.filter(supervising_manager=user, role=User.Role.SALESPERSON)
    return _scoped_staff(user).filter(role=User.Role.SALESPERSON)


def _group_conversion_rows(rows):
    return [
        {"label": r.label, "seen": r.seen, "converted": r.converted, "rate": f"{r.rate:.1f}"}
        for r in rows
    ]


def _user_summary(user):
    return {
        "id": str(user.id),
        "name": _name(user),
        "email": user.email,
        "status": user.status,
        "date_joined": user.date_joined.isoformat(),
    }


# ---------------------------------------------------------------------------
# Admin dashboard
# ---------------------------------------------------------------------------

def build_admin_dashboard(user, now=None):
    """Enterprise-wide KPIs, rankings and breakdowns for an admin."""
    now = timezone.localtime(now or timezone.now())
    ytd = period_window(Period.YTD, now)
    mtd = period_window(Period.MTD, now)
    top_n = _top_n()

    records = load_customer_records(scoped_customers(user))
    transactions = scoped_transactions(user)
    showrooms = _scoped_showrooms(user)
    staff = _scoped_staff(user)
    managers = staff.filter(role=User.Role.MANAGER)
    salespeople = staff.filter(role=User.Role.SALESPERSON)
    active = {"is_active": True, "status": User.Status.ACTIVE}

    kpis = compose_kpis(
        KPIContext(
            customers=records,
            current_sales=sum_transactions(transactions, ytd.start, ytd.end),
            previous_sales=sum_transactions(transactions, ytd.previous_start, ytd.previous_end),
            total_showrooms=showrooms.active().count(),
            total_managers=managers.filter(**active).count(),
            total_salespeople=salespeople.filter(**active).count(),
            new_customers_since=mtd.start,
        )
    )

    # Showroom ranking: YTD sales from transactions, YTD leads from customers.
    ytd_sales = {
        row["showroom_id"]: row["total"]
        for row in transactions.filter(
            transaction_date__gte=ytd.start, transaction_date__lte=ytd.end
        )
        .values("showroom_id")
        .annotate(
            total=Coalesce(
                Sum("total_amount"),
                Value(ZERO),
                output_field=DecimalField(max_digits=16, decimal_places=2),
            )
        )
    }
    ytd_leads = Counter(
        r.assigned_showroom_id
        for r in records
        if r.created_at is not None and ytd.start <= r.created_at <= ytd.end
    )
    showroom_rows = [
        {
            "id": str(s.id),
            "name": s.name,
            "code": s.code,
            "city": s.city,
            "manager_name": _name(s.manager) or "N/A",
            "ytd_sales": ytd_sales.get(s.id, ZERO),
            "ytd_leads": ytd_leads.get(s.id, 0),
        }
        for s in showrooms
    ]
    top_showrooms = []
    for row in rank_showrooms(showroom_rows, limit=top_n):
        row = dict(row)
        row["ytd_sales_display"] = _display(row["ytd_sales"])
        row["ytd_sales"] = _money(row["ytd_sales"])
        top_showrooms.append(row)

    pending = managers.filter(status=User.Status.PENDING_APPROVAL).order_by("-date_joined")[:5]
    alerts = [
        {
            "type": "manager_pending_approval",
            "message": f"{_name(m)} is awaiting approval.",
            "user": _user_summary(m),
        }
        for m in pending
    ]

    salesperson_names = {sp.id: _name(sp) for sp in salespeople.filter(**active)}

    payload = {
        "generated_at": now.isoformat(),
        "kpis": kpis.as_display(_currency()),
        "alerts": alerts,
        "top_showrooms": top_showrooms,
        "recent_managers": [
            _user_summary(m) for m in managers.filter(**active).order_by("-date_joined")[:3]
        ],
        "top_walkout_reasons": [asdict(r) for r in top_walkout_reasons(records, limit=3)],
        "lowest_category_conversion": _group_conversion_rows(
            lowest_category_conversion(records, limit=top_n)
        ),
        "bottom_salesperson_performance": [
            {"id": str(r.id), "name": r.name, "sales_count": r.sales_count}
            for r in salesperson_performance(records, salesperson_names, limit=top_n)
        ],
        "lead_source_breakdown": [asdict(r) for r in lead_source_breakdown(records)],
    }
    logger.info("Admin dashboard built for %s (%d customers).", user.email, len(records))
    return payload


# ---------------------------------------------------------------------------
# Manager dashboard
# ---------------------------------------------------------------------------

def build_manager_dashboard(user, now=None):
    """Team-level pipeline and follow-up figures for a manager."""
    now = timezone.localtime(now or timezone.now())
    today = timezone.localdate(now)
    mtd = period_window(Period.MTD, now)

    customers = scoped_customers(user)
    records = load_customer_records(customers)
    team = list(_team(user).select_related("assigned_showroom"))
    transactions = scoped_transactions(user)

    kpis = compose_kpis(
        KPIContext(
            customers=records,
            current_sales=sum_transactions(transactions, mtd.start, mtd.end),
            previous_sales=sum_transactions(transactions, mtd.previous_start, mtd.previous_end),
            total_salespeople=len(team),
            new_customers_since=now - timedelta(days=30),
        )
    )
    per_member = Counter(r.assigned_salesperson_id for r in records)

    payload = {
        "generated_at": now.isoformat(),
        "team_members": [
            {
                "id": str(member.id),
                "name": _name(member),
                "email": member.email,
                "employee_id": member.employee_id,
                "showroom": member.assigned_showroom.name if member.assigned_showroom else None,
                "status": member.status,
                "customer_count": per_member.get(member.id, 0),
            }
            for member in team
        ],
        "total_team_customers": len(records),
        "pending_follow_ups": customers.filter(follow_up_date__gte=today).count(),
        "new_customers_last_30_days": kpis.new_customers,
        "team_revenue_opportunity": _money(kpis.active_pipeline_value),
        "team_revenue_opportunity_display": _display(kpis.active_pipeline_value),
        "open_opportunities": kpis.open_opportunities,
        "converted_revenue": _money(kpis.converted_revenue),
        "converted_revenue_display": _display(kpis.converted_revenue),
        "converted_customers": kpis.converted_customers,
        "conversion_rate": kpis.conversion_rate,
        "mtd_sales": _money(kpis.gross_sales),
        "previous_mtd_sales": _money(kpis.previous_gross_sales),
        "sales_percentage_change": float(kpis.sales_percentage_change),
    }
    logger.info("Manager dashboard built for %s (%d team members).", user.email, len(team))
    return payload


# ---------------------------------------------------------------------------
# Salesperson dashboard
# ---------------------------------------------------------------------------

def build_salesperson_dashboard(user, now=None):
    """A salesperson's own pipeline, conversions and upcoming follow-ups."""
    now = timezone.localtime(now or timezone.now())
    today = timezone.localdate(now)
    wtd = period_window(Period.WTD, now)

    customers = Customer.objects.alive().filter(assigned_salesperson=user)
    records = load_customer_records(customers)
    kpis = compose_kpis(
        KPIContext(
            customers=records,
            new_customers_since=wtd.start,
            prefer_revenue_opportunity=True,
        )
    )

    upcoming = (
        customers.filter(follow_up_date__gte=today)
        .order_by("follow_up_date", "full_name")
        .values("id", "full_name", "phone_number", "lead_status", "follow_up_date")[:10]
    )
    return {
        "generated_at": now.isoformat(),
        "total_customers": len(records),
        "pipeline_value": _money(kpis.active_pipeline_value),
        "pipeline_value_display": _display(kpis.active_pipeline_value),
        "open_opportunities": kpis.open_opportunities,
        "converted_revenue": _money(kpis.converted_revenue),
        "converted_revenue_display": _display(kpis.converted_revenue),
        "converted_customers": kpis.converted_customers,
        "conversion_rate": kpis.conversion_rate,
        "new_customers_this_week": kpis.new_customers,
        "upcoming_follow_ups": [
            {
                "id": str(row["id"]),
                "full_name": row["full_name"],
                "phone_number": row["phone_number"],
                "lead_status": row["lead_status"],
                "follow_up_date": row["follow_up_date"].isoformat(),
            }
            for row in upcoming
        ],
    }


# ---------------------------------------------------------------------------
# Converted revenue comparison
# ---------------------------------------------------------------------------

def build_converted_revenue_comparison(user, period, now=None):
    """Converted revenue for the period to date against the previous period.

    Raises ``ValueError`` for an unknown *period*.
    """
    period = Period.parse(period)
    now = timezone.localtime(now or timezone.now())
    window = period_window(period, now)
    customers = scoped_customers(user)

    current = summarize_conversions(
        load_customer_records(customers.filter(created_at__gte=window.start, created_at__lte=window.end))
    )
    previous = summarize_conversions(
        load_customer_records(
            customers.filter(created_at__gte=window.previous_start, created_at__lte=window.previous_end)
        )
    )
    return {
        "period": period.value,
        "label": window.label,
        "start": window.start.isoformat(),
        "end": window.end.isoformat(),
        "previous_start": window.previous_start.isoformat(),
        "previous_end": window.previous_end.isoformat(),
        "current_total": _money(current.converted_revenue),
        "previous_total": _money(previous.converted_revenue),
        "current_total_display": _display(current.converted_revenue),
        "previous_total_display": _display(previous.converted_revenue),
        "current_converted_customers": current.converted_customers,
        "previous_converted_customers": previous.converted_customers,
        "percentage_change": float(
            percentage_change(current.converted_revenue, previous.converted_revenue)
        ),
    }


# ---------------------------------------------------------------------------
# Reports overview
# ---------------------------------------------------------------------------

def _ranked_entry(totals, names, key="revenue"):
    rows = [{"id": str(k), "name": names.get(k, "N/A"), key: v} for k, v in totals.items()]
    best = top_by(rows, key)
    if best is None:
        return None
    best = dict(best)
    best[f"{key}_display"] = _display(best[key])
    best[key] = _money(best[key])
    return best


def build_reports_overview(user):
    """Revenue, conversion and leader figures plus the filter option lists."""
    showrooms = list(_scoped_showrooms(user))
    staff = list(_scoped_staff(user).filter(role__in=[User.Role.MANAGER, User.Role.SALESPERSON]))
    managers = [u for u in staff if u.role == User.Role.MANAGER]
    salespeople = [u for u in staff if u.role == User.Role.SALESPERSON]

    transactions = load_transaction_records(scoped_transactions(user))
    total_revenue = sum((t.total_amount for t in transactions), ZERO)
    total_transactions = len(transactions)
    if total_transactions:
        average = (total_revenue / total_transactions).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    else:
        average = ZERO

    records = load_customer_records(scoped_customers(user))
    closed_won = sum(1 for r in records if r.is_closed_won)

    showroom_names = {s.id: s.name for s in showrooms}
    staff_names = {u.id: _name(u) for u in staff}
    manager_of = {u.id: u.supervising_manager_id for u in salespeople}

    by_showroom = sum_by(transactions, lambda t: t.showroom_id)
    by_salesperson = sum_by(transactions, lambda t: t.salesperson_id)
    by_manager = sum_by(transactions, lambda t: manager_of.get(t.salesperson_id))

    return {
        "filters": {
            "showrooms": [{"id": str(s.id), "name": s.name} for s in showrooms],
            "managers": [{"id": str(u.id), "name": _name(u)} for u in managers],
            "salespeople": [{"id": str(u.id), "name": _name(u)} for u in salespeople],
        },
        "total_revenue": _money(total_revenue),
        "total_revenue_display": _display(total_revenue),
        "total_transactions": total_transactions,
        "avg_transaction_value": _money(average),
        "avg_transaction_value_display": _display(average),
        "total_customers": len(records),
        "lead_conversion_rate": format_rate(closed_won, len(records)),
        "top_showroom": _ranked_entry(by_showroom, showroom_names),
        "top_salesperson": _ranked_entry(by_salesperson, staff_names),
        "top_manager": _ranked_entry(by_manager, staff_names),
    }


# ---------------------------------------------------------------------------
# Breakdown exports
# ---------------------------------------------------------------------------

BREAKDOWN_REPORTS = {
    "lead_sources": (
        "Lead sources",
        [("label", "Lead source"), ("count", "Customers")],
    ),
    "category_conversion": (
        "Category conversion",
        [("label", "Category"), ("seen", "Customers"), ("converted", "Closed Won"), ("rate", "Conversion %")],
    ),
    "walkout_reasons": (
        "Walkout reasons",
        [("label", "Reason"), ("count", "Customers")],
    ),
}


def breakdown_rows(user, report):
    """Rows for one exportable breakdown; raises ``ValueError`` for unknown names."""
    if report not in BREAKDOWN_REPORTS:
        raise ValueError(f"Unknown report: {report!r}")
    records = load_customer_records(scoped_customers(user))
    if report == "lead_sources":
        return [asdict(r) for r in lead_source_breakdown(records)]
    if report == "category_conversion":
        return _group_conversion_rows(lowest_category_conversion(records, limit=len(CategoryType)))
    return [asdict(r) for r in top_walkout_reasons(records, limit=len(WALKOUT_REASONS))]
