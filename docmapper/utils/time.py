"""Time utilities for stored timestamps. Values are stored in UTC."""

from datetime import datetime, timezone

from docmapper.config.registry import Config


def utc_now() -> datetime:
    """Return current UTC datetime. Use for created_at/updated_at."""
    return datetime.now(timezone.utc)


def to_configured_time(value: datetime, config: Config) -> datetime:
    """
    Convert a timestamp read from the database for the application.
    Naive values are taken as UTC, the way the driver returns them by default.
    UTC is kept when use_utc is set; otherwise the value moves to config.time_zone.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if config.use_utc:
        return value.astimezone(timezone.utc)
    return value.astimezone(config.time_zone)
