"""Celery tasks for the reports app."""
import logging
from datetime import date, datetime, time, timedelta

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger("jewelcrm")


def _day_bounds(day):
    start = timezone.make_aware(datetime.combine(day, time.min))
    end = timezone.make_aware(datetime.combine(day, time.max))
    return start, end


@shared_task(name="reports.tasks.daily_pipeline_snapshot")
def daily_pipeline_snapshot(snapshot_date=None):
    """Save a PipelineSnapshot per active showroom (yesterday by default).

    Runs once per day (see ``config/celery.py`` beat schedule). Showrooms that
    already have a snapshot for the date are left untouched.
    """
    from analytics.kpis import KPIContext, compose_kpis
    from customers.models import Customer
    from customers.services import load_customer_records
    from reports.models import PipelineSnapshot
    from sales.models import SalesTransaction
    from sales.services import sum_transactions
    from showrooms.models import Showroom

    if snapshot_date is None:
        snapshot_date = timezone.localdate() - timedelta(days=1)
    elif isinstance(snapshot_date, str):
        snapshot_date = date.fromisoformat(snapshot_date)

    day_start, day_end = _day_bounds(snapshot_date)
    created_count = 0

    for showroom in Showroom.objects.active():
        if PipelineSnapshot.objects.filter(showroom=showroom, date=snapshot_date).exists():
            logger.debug("Pipeline snapshot already exists for %s on %s", showroom, snapshot_date)
            continue

        records = load_customer_records(
            Customer.objects.alive().filter(assigned_showroom=showroom, created_at__lte=day_end)
        )
        kpis = compose_kpis(
            KPIContext(
                customers=records,
                current_sales=sum_transactions(
                    SalesTransaction.objects.filter(showroom=showroom), day_start, day_end
                ),
            )
        )

        PipelineSnapshot.objects.create(
            showroom=showroom,
            date=snapshot_date,
            total_customers=len(records),
            open_opportunities=kpis.open_opportunities,
            active_pipeline_value=kpis.active_pipeline_value,
            converted_customers=kpis.converted_customers,
            converted_revenue=kpis.converted_revenue,
            gross_sales=kpis.gross_sales,
        )
        created_count += 1
        logger.info("Pipeline snapshot created for %s on %s", showroom, snapshot_date)

    logger.info("daily_pipeline_snapshot completed: %d snapshots created.", created_count)
    return f"{created_count} snapshots created"
