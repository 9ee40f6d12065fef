"""JSON settings document loader. One section per environment name."""

import json
from pathlib import Path
from typing import Any

from docmapper.config.logging import get_logger
from docmapper.config.registry import Config, get_config
from docmapper.config.settings import get_settings

logger = get_logger(__name__)


def load_settings_document(path: str | Path) -> dict[str, Any]:
    """Parse the settings document at `path`. The top level must be an object."""
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Settings document {str(path)!r} must contain a JSON object")
    return data


def get_environment_settings(path: str | Path, environment: str) -> dict[str, Any]:
    """Return the section for `environment`. Raises ValueError if the document has none."""
    data = load_settings_document(path)
    section = data.get(environment)
    if section is None:
        raise ValueError(f"No {environment!r} section in settings document {str(path)!r}")
    return section


def configure_from_file(
    path: str | Path | None = None,
    environment: str | None = None,
    config: Config | None = None,
) -> Config:
    """
    Load one environment's section and apply it with Config.from_settings().
    Path and environment default to the settings_file and environment settings;
    config defaults to the shared registry.
    """
    s = get_settings()
    path = path or s.settings_file
    environment = environment or s.environment
    config = config or get_config()
    section = get_environment_settings(path, environment)
    logger.info("Loading settings document", extra={"path": str(path), "environment": environment})
    config.from_settings(section)
    return config
