"""Health and version queries against a configured database handle."""

from typing import Any

from pymongo.database import Database
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from docmapper.config.logging import get_logger

logger = get_logger(__name__)


def ping_database(db: Database) -> dict[str, Any]:
    """
    Ping the server behind `db`. Returns dict with 'ok' bool and optional 'error' string.
    Used for health checks; does not leak internal details.
    """
    try:
        db.client.admin.command("ping")
        return {"ok": True}
    except ServerSelectionTimeoutError as e:
        logger.warning("MongoDB ping timeout", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_timeout"}
    except PyMongoError as e:
        logger.warning("MongoDB ping failed", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_failed"}


def server_version(db: Database) -> tuple[int, ...]:
    """Return the server's reported version, e.g. (7, 0, 2). Driver errors propagate."""
    info = db.client.server_info()
    return parse_version(info["version"])


def parse_version(version: str) -> tuple[int, ...]:
    """Turn '4.4.1' or '7.0.0-rc1' into a comparable tuple of ints."""
    parts: list[int] = []
    for piece in version.split("."):
        digits = ""
        for ch in piece:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
    return tuple(parts)
