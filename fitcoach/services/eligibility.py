"""
Reminder Eligibility

Pure decision of whether a reminder rule should fire at a given time.
"""

from datetime import datetime, timezone


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored/passed as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def hours_since(last_sent_at: datetime, now: datetime) -> float:
    return (_as_utc(now) - _as_utc(last_sent_at)).total_seconds() / 3600


def is_due(rule, now: datetime) -> bool:
    """
    Decide whether a reminder rule is due.

    - disabled rules are never due
    - a rule that has never fired is due immediately
    - a non-positive frequency is treated as not due
    - otherwise due once frequency_hours have elapsed since last_sent_at

    Args:
        rule: Object with enabled, frequency_hours and last_sent_at
        now: Current wall-clock time

    Returns:
        True if a reminder should be sent now
    """
    if not rule.enabled:
        return False

    if rule.last_sent_at is None:
        return True

    try:
        frequency = float(rule.frequency_hours)
    except (TypeError, ValueError):
        return False
    if frequency <= 0:
        return False

    return hours_since(rule.last_sent_at, now) >= frequency
