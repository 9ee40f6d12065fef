"""Startup and shutdown for host applications: logging, settings document, registry, clients."""

from pathlib import Path

from docmapper.config.logging import configure_logging, get_logger
from docmapper.config.registry import Config
from docmapper.config.settings import get_settings
from docmapper.config.static import configure_from_file
from docmapper.resources.mongo.client import close_clients
from docmapper.resources.mongo.session import ping_database

logger = get_logger(__name__)


def configure(
    path: str | Path | None = None,
    environment: str | None = None,
    config: Config | None = None,
    check_version: bool = False,
) -> Config:
    """
    Configure logging, load the settings document into the registry and return it.
    With check_version, the master is verified against min_server_version; errors abort startup.
    """
    configure_logging()
    settings = get_settings()
    logger.info("docmapper starting", extra={"environment": environment or settings.environment})
    config = configure_from_file(path, environment, config)
    if check_version:
        config.check_database(config.master)
    health = ping_database(config.master)
    if not health["ok"]:
        logger.warning("Master database not reachable yet", extra={"error": health.get("error")})
    return config


def shutdown() -> None:
    """Close every MongoDB client the registry opened."""
    logger.info("docmapper shutting down")
    close_clients()
    logger.info("Shutdown complete")
