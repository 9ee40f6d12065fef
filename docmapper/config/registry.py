"""
Process-wide configuration registry for the document mapper.

Holds the behavior flags read by the persistence layer, the master database and the
read-only slave databases. Configure it once at startup, either through the properties
or in bulk with Config.from_settings(), then treat it as read-only.
"""

from datetime import tzinfo
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field
from pymongo.database import Database

from docmapper.config.logging import get_logger
from docmapper.config.settings import get_settings
from docmapper.config.storage.mongo import master_request, replica_requests
from docmapper.config.zones import local_offset_zone, resolve_time_zone
from docmapper.errors import InvalidDatabase, UnsupportedVersion
from docmapper.resources.mongo.client import open_database
from docmapper.resources.mongo.session import parse_version, server_version

logger = get_logger(__name__)

Connect = Callable[..., Database]


class ConfigOptions(BaseModel):
    """Option keys accepted by Config.from_settings(). Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    allow_dynamic_fields: bool | None = None
    reconnect_time: int | None = Field(default=None, ge=0)
    parameterize_keys: bool | None = None
    persist_in_safe_mode: bool | None = None
    persist_types: bool | None = None
    raise_not_found_error: bool | None = None
    use_object_ids: bool | None = None
    # null leaves a flag unchanged, except use_utc which its setter turns into False
    use_utc: Any = None
    time_zone: str | None = None


def _check_handle(db: Any) -> Database:
    if not isinstance(db, Database):
        raise InvalidDatabase(db)
    return db


def _padded(version: tuple[int, ...], width: int) -> tuple[int, ...]:
    return version + (0,) * (width - len(version))


class Config:
    """Behavior flags plus master/slave database handles."""

    def __init__(self) -> None:
        self._master: Database | None = None
        self._slaves: list[Database] | None = None
        self._time_zone: tzinfo | None = None
        self._use_utc = False
        self.reset()

    def reset(self) -> None:
        """Restore flag defaults and forget the time zone. Master and slaves are kept."""
        self.allow_dynamic_fields = True
        self.parameterize_keys = True
        self.persist_in_safe_mode = True
        self.persist_types = True
        self.raise_not_found_error = True
        self.reconnect_time = 3
        self.use_object_ids = False
        self._time_zone = None

    @property
    def master(self) -> Database:
        """The master database. Raises InvalidDatabase if none has been set."""
        if self._master is None:
            raise InvalidDatabase(None)
        return self._master

    @master.setter
    def master(self, db: Database) -> None:
        self._master = _check_handle(db)
        logger.info("Master database set", extra={"database": db.name})

    database = master

    @property
    def slaves(self) -> list[Database]:
        """Read-only replica databases; empty when none are configured."""
        return list(self._slaves) if self._slaves is not None else []

    @slaves.setter
    def slaves(self, dbs: list[Database]) -> None:
        checked = [_check_handle(db) for db in dbs]
        self._slaves = checked
        logger.info("Slave databases set", extra={"count": len(checked)})

    @property
    def use_utc(self) -> bool:
        """Whether timestamps are returned in UTC instead of the configured zone."""
        return self._use_utc

    @use_utc.setter
    def use_utc(self, value: Any) -> None:
        self._use_utc = value is True

    @property
    def time_zone(self) -> tzinfo:
        """The assigned zone, or the local-offset fallback computed now if never assigned."""
        if self._time_zone is None:
            return local_offset_zone()
        return self._time_zone

    @time_zone.setter
    def time_zone(self, name: str | None) -> None:
        self._time_zone = resolve_time_zone(name)
        logger.debug("Time zone set", extra={"time_zone": str(self._time_zone)})

    def from_settings(self, settings: dict[str, Any], connect: Connect | None = None) -> None:
        """
        Configure from a settings mapping, usually one section of a settings document.

        'database', 'host' and 'port' describe the master; each 'slaves' entry gives the
        host/port of a read-only replica of the same database. Remaining keys that name an
        option are applied; anything else is ignored. All connections are opened and all
        values validated before the registry changes, so a failure leaves it untouched.
        `connect` defaults to open_database(); its errors propagate unchanged.
        """
        connect = connect or open_database
        master_req = master_request(settings)
        replica_reqs = replica_requests(settings)
        options = ConfigOptions.model_validate(settings)

        zone = None
        if "time_zone" in options.model_fields_set:
            zone = resolve_time_zone(options.time_zone)

        master = _check_handle(connect(master_req.database, host=master_req.host, port=master_req.port))
        slaves = [
            _check_handle(connect(master_req.database, host=req.host, port=req.port, read_only=True))
            for req in replica_reqs
        ]

        self.master = master
        self.slaves = slaves
        for name in options.model_fields_set:
            value = getattr(options, name)
            if name == "time_zone":
                self._time_zone = zone
            elif value is not None or name == "use_utc":
                setattr(self, name, value)
        logger.info(
            "Configuration loaded",
            extra={"database": master_req.database, "slaves": len(slaves), "options": sorted(options.model_fields_set)},
        )

    def check_database(self, db: Any, minimum: str | None = None) -> None:
        """
        Raise InvalidDatabase unless `db` is a Database, and UnsupportedVersion when its
        server is older than `minimum` (defaults to the min_server_version setting).
        """
        _check_handle(db)
        required = parse_version(minimum or get_settings().min_server_version)
        version = server_version(db)
        # "1.6" and "1.6.0" are the same release
        width = max(len(version), len(required))
        if _padded(version, width) < _padded(required, width):
            raise UnsupportedVersion(version, required)


_config: Config | None = None


def get_config() -> Config:
    """Return the shared registry. Creates it on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config | None) -> None:
    """Replace the shared registry; None drops it so the next get_config() starts fresh."""
    global _config
    _config = config
