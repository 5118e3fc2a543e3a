"""
Billing Cycle Calculator

Given a credit card's closing day and a reference date, computes the
statement period containing that date. Dates are materialized at local
midnight in the owner's UTC offset and returned as UTC instants.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, timezone


@dataclass(frozen=True)
class BillingPeriod:
    start_at: datetime
    end_at: datetime


def _first_day_of_month(value: date) -> date:
    return value.replace(day=1)


def _first_day_of_next_month(value: date) -> date:
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def last_day_of_previous_month(value: date) -> date:
    return _first_day_of_month(value) - timedelta(days=1)


def last_day_of_month(value: date) -> date:
    return _first_day_of_next_month(value) - timedelta(days=1)


def last_day_of_next_month(value: date) -> date:
    return last_day_of_month(_first_day_of_next_month(value))


def closing_day_date_compare(month_end: date, closing_day: int) -> date:
    """
    Closing date inside the month of ``month_end``.

    Months shorter than ``closing_day`` close on their last day.
    """
    if month_end.day <= closing_day:
        return month_end
    return month_end - timedelta(days=month_end.day - closing_day)


def _local_midnight_utc(value: date, utc_offset: timedelta) -> datetime:
    local = datetime.combine(value, time.min, tzinfo=timezone(utc_offset))
    return local.astimezone(UTC)


def compute_billing_cycle(
    closing_day: int, reference_date: date, utc_offset: timedelta
) -> BillingPeriod:
    """
    Compute the statement period that contains ``reference_date``.

    A reference day equal to the closing day belongs to the cycle that
    closes on it, same as an earlier day.

    Args:
        closing_day: Day of month the statement closes on (1..31)
        reference_date: Calendar date in the owner's local time
        utc_offset: Owner's offset from UTC

    Returns:
        BillingPeriod with start_at (day after the previous closing date)
        and end_at (the closing date), both UTC instants of local midnight

    Raises:
        ValueError: closing_day outside 1..31, or a period reaching past
            the supported calendar (years 1..9999)
    """
    if not 1 <= closing_day <= 31:
        raise ValueError(f"closing day must be between 1 and 31, got {closing_day}")

    try:
        if reference_date.day <= closing_day:
            start_anchor = last_day_of_previous_month(reference_date)
            end_anchor = last_day_of_month(reference_date)
        else:
            start_anchor = last_day_of_month(reference_date)
            end_anchor = last_day_of_next_month(reference_date)

        previous_closing = closing_day_date_compare(start_anchor, closing_day)
        try:
            start = previous_closing + timedelta(days=1)
        except OverflowError:
            start = previous_closing
        end = closing_day_date_compare(end_anchor, closing_day)

        return BillingPeriod(
            start_at=_local_midnight_utc(start, utc_offset),
            end_at=_local_midnight_utc(end, utc_offset),
        )
    except OverflowError as e:
        raise ValueError(f"billing period of {reference_date} is out of range") from e
