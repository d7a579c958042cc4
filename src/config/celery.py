"""Celery configuration."""
import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.getenv("DJANGO_SETTINGS_MODULE", "config.settings.prod"),
)

app = Celery("jewelcrm")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# Beat schedule
app.conf.beat_schedule = {
    "daily-pipeline-snapshot": {
        "task": "reports.tasks.daily_pipeline_snapshot",
        "schedule": crontab(minute=30, hour=0),  # Daily at 00:30
    },
}
