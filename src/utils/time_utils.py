"""Time helpers; internal datetimes are naive UTC."""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    """Return the current UTC business date."""
    return utcnow().date()


__all__ = ["utcnow", "today"]
