"""Business day boundaries in a shop's operating time zone."""

from datetime import date, datetime, time, timedelta
from typing import Tuple, Union
from zoneinfo import ZoneInfo

from django.utils import timezone


def _as_zone(time_zone: Union[str, ZoneInfo]) -> ZoneInfo:
    if isinstance(time_zone, str):
        return ZoneInfo(time_zone)
    return time_zone


def business_day_bounds(business_date: date, time_zone) -> Tuple[datetime, datetime]:
    """
    Return the [start, end) instants of a business day.

    The day runs from local midnight to the next local midnight, so it
    is 23 or 25 hours long across DST changes.
    """
    zone = _as_zone(time_zone)
    start = datetime.combine(business_date, time.min, tzinfo=zone)
    end = datetime.combine(business_date + timedelta(days=1), time.min, tzinfo=zone)
    return start, end


def business_date_for(moment: datetime = None, time_zone=None) -> date:
    """Return the local calendar date of ``moment`` (default: now)."""
    if moment is None:
        moment = timezone.now()
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    if time_zone is None:
        return timezone.localdate(moment)
    return moment.astimezone(_as_zone(time_zone)).date()
