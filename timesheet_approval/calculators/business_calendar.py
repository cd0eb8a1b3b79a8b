"""Business-day arithmetic.

A business day is Monday to Friday. Public holidays are not considered.
"""

import datetime as dt

# date.weekday(): Monday is 0, Saturday 5, Sunday 6
_WEEKEND_DAYS = {5, 6}


def is_weekend(date: dt.date) -> bool:
    """Check whether a date falls on Saturday or Sunday.

    Example:
        >>> is_weekend(dt.date(2024, 6, 15))
        True
        >>> is_weekend(dt.date(2024, 6, 14))
        False
    """
    return date.weekday() in _WEEKEND_DAYS


def business_days_ago(from_date: dt.date, business_days: int) -> dt.date:
    """Walk back from ``from_date`` until ``business_days`` weekdays are passed.

    ``from_date`` itself is not counted. The walk stops on the day that
    completes the count, so the result is the n-th weekday before
    ``from_date``.

    Args:
        from_date: Day to count back from
        business_days: Number of weekdays to step over (at least 1)

    Returns:
        The date reached after passing ``business_days`` weekdays

    Raises:
        ValueError: If business_days is less than 1

    Example:
        >>> business_days_ago(dt.date(2024, 6, 15), 4)  # Saturday
        datetime.date(2024, 6, 11)
        >>> business_days_ago(dt.date(2024, 6, 17), 1)  # Monday
        datetime.date(2024, 6, 14)
    """
    if business_days < 1:
        raise ValueError(f"business_days must be at least 1, got {business_days}")

    days_back = 0
    counted = 0
    while counted < business_days:
        days_back += 1
        if not is_weekend(from_date - dt.timedelta(days=days_back)):
            counted += 1

    return from_date - dt.timedelta(days=days_back)
