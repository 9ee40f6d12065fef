"""MongoDB database handles for the master and read-only replicas, with timeouts and shutdown."""

from pymongo import MongoClient, ReadPreference
from pymongo.database import Database

from docmapper.config.logging import get_logger
from docmapper.config.storage.mongo import DEFAULT_HOST, DEFAULT_PORT, get_mongo_config

logger = get_logger(__name__)

_clients: list[MongoClient] = []


def open_database(
    name: str,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    read_only: bool = False,
) -> Database:
    """
    Open a client against host:port and return its database `name`.
    Read-only handles prefer secondaries so replicas can serve reads.
    The client is tracked so close_clients() can release it on shutdown.
    """
    cfg = get_mongo_config()
    options = {
        "connectTimeoutMS": cfg["connect_timeout_ms"],
        "serverSelectionTimeoutMS": cfg["server_selection_timeout_ms"],
    }
    if read_only:
        options["read_preference"] = ReadPreference.SECONDARY_PREFERRED
    client = MongoClient(host, port, **options)
    _clients.append(client)
    logger.info(
        "MongoDB client opened",
        extra={"host": host, "port": port, "database": name, "read_only": read_only},
    )
    return client[name]


def close_clients() -> None:
    """Close every client opened by open_database(). Call on application shutdown."""
    while _clients:
        client = _clients.pop()
        try:
            client.close()
        except Exception as e:
            logger.warning("Error closing MongoDB client", extra={"error": str(e)})
    logger.info("MongoDB clients closed")
