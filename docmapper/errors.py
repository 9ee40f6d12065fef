"""Errors raised by the configuration registry."""

from typing import Any


class DocumentMapperError(Exception):
    """Base class for docmapper errors."""


class InvalidDatabase(DocumentMapperError):
    """Raised when a master or slave is not a usable database handle, or the master is unset."""

    def __init__(self, database: Any):
        self.database = database
        if database is None:
            message = "No database has been configured; set a master database before using it"
        else:
            message = f"{database!r} is not a valid pymongo Database"
        super().__init__(message)


class UnsupportedVersion(DocumentMapperError):
    """Raised when the connected server is older than the minimum supported version."""

    def __init__(self, version: tuple[int, ...], minimum: tuple[int, ...]):
        self.version = version
        self.minimum = minimum
        super().__init__(
            f"MongoDB {_dotted(version)} is not supported; version {_dotted(minimum)} or newer is required"
        )


def _dotted(version: tuple[int, ...]) -> str:
    return ".".join(str(part) for part in version)
