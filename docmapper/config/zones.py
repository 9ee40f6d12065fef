"""Supported time zone catalog and the local-offset fallback zone."""

import time
from datetime import timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, available_timezones


@lru_cache
def supported_zone_names() -> tuple[str, ...]:
    """Return every IANA zone name that can be assigned to time_zone, sorted."""
    return tuple(sorted(available_timezones()))


def _localtime() -> time.struct_time:
    return time.localtime()


def local_offset_zone() -> timezone:
    """
    Fixed-offset zone for the current local UTC offset, one hour less when DST is active.
    Computed from the moment of the call; later offset or DST changes are not reflected.
    """
    now = _localtime()
    offset = timedelta(seconds=now.tm_gmtoff)
    if now.tm_isdst > 0:
        offset -= timedelta(hours=1)
    return timezone(offset)


def resolve_time_zone(name: str | None) -> tzinfo:
    """
    Resolve a zone name against the catalog. Empty or None means the local-offset fallback.
    Raises ValueError listing the supported names when `name` is unknown.
    """
    if not name:
        return local_offset_zone()
    names = supported_zone_names()
    if name not in names:
        raise ValueError(f"Unknown time zone {name!r}; supported zones are: {', '.join(names)}")
    return ZoneInfo(name)
