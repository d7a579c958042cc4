"""Current vs previous reporting windows (week, month and year to date)."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class Period(str, Enum):
    WTD = "WTD"
    MTD = "MTD"
    YTD = "YTD"

    @classmethod
    def parse(cls, value) -> "Period":
        """Case-insensitive lookup; raises ``ValueError`` for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown period: {value!r}") from None


PERIOD_LABELS = {
    Period.WTD: "Week to date",
    Period.MTD: "Month to date",
    Period.YTD: "Year to date",
}


@dataclass(frozen=True)
class PeriodWindow:
    label: str
    start: datetime
    end: datetime
    previous_start: datetime
    previous_end: datetime


def _shift(moment: datetime, *, year: int, month: int) -> datetime:
    """Move *moment* to year/month, clamping the day to the month's length."""
    last_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def period_window(period, now: datetime) -> PeriodWindow:
    """Both windows end at the same point relative to their start."""
    period = Period.parse(period)

    if period is Period.YTD:
        start = _midnight(now.replace(month=1, day=1))
        previous_end = _shift(now, year=now.year - 1, month=now.month)
        previous_start = _midnight(previous_end.replace(month=1, day=1))
    elif period is Period.MTD:
        start = _midnight(now.replace(day=1))
        if now.month == 1:
            year, month = now.year - 1, 12
        else:
            year, month = now.year, now.month - 1
        previous_end = _shift(now, year=year, month=month)
        previous_start = _midnight(previous_end.replace(day=1))
    else:
        start = _midnight(now - timedelta(days=now.weekday()))
        previous_start = start - timedelta(days=7)
        previous_end = now - timedelta(days=7)

    return PeriodWindow(
        label=PERIOD_LABELS[period],
        start=start,
        end=now,
        previous_start=previous_start,
        previous_end=previous_end,
    )
