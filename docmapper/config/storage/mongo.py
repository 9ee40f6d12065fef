"""MongoDB connection requests read from a settings mapping. Read-only; no business logic."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from docmapper.config.settings import get_settings

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 27017


class ReplicaRequest(BaseModel):
    """One entry of the settings 'slaves' list."""

    host: str = Field(default=DEFAULT_HOST)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)


class MasterRequest(BaseModel):
    """Database name plus master host/port taken from the top level of the settings."""

    database: str = Field(..., min_length=1, description="Database name shared by master and slaves")
    host: str = Field(default=DEFAULT_HOST)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)


def master_request(settings: dict[str, Any]) -> MasterRequest:
    """Build the master request. Missing or null host/port fall back to the configured defaults."""
    defaults = get_settings()
    return MasterRequest(
        database=settings.get("database"),
        host=settings.get("host") or defaults.mongo_host,
        port=settings.get("port") or defaults.mongo_port,
    )


def replica_requests(settings: dict[str, Any]) -> list[ReplicaRequest]:
    """
    Build one request per 'slaves' entry. A missing or null list yields no requests.
    Raises ValueError when an entry is not a host/port mapping.
    """
    defaults = get_settings()
    out: list[ReplicaRequest] = []
    for entry in settings.get("slaves") or []:
        if not isinstance(entry, Mapping):
            raise ValueError(f"Each 'slaves' entry must be a mapping with host and port, got {entry!r}")
        out.append(
            ReplicaRequest(
                host=entry.get("host") or defaults.mongo_host,
                port=entry.get("port") or defaults.mongo_port,
            )
        )
    return out


def get_mongo_config() -> dict:
    """Return MongoDB driver parameters from settings for use by resources."""
    s = get_settings()
    return {
        "connect_timeout_ms": s.mongo_connect_timeout_ms,
        "server_selection_timeout_ms": s.mongo_server_selection_timeout_ms,
    }
