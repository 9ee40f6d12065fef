"""Document id generation and key parameterization driven by the registry flags."""

import re

from bson import ObjectId

from docmapper.config.registry import Config

_NON_KEY_CHARS = re.compile(r"[^a-z0-9_]+")


def generate_id(config: Config) -> ObjectId | str:
    """New primary key: an ObjectId when use_object_ids is set, else its 24-char hex string."""
    oid = ObjectId()
    return oid if config.use_object_ids else str(oid)


def parameterize_key(value: str) -> str:
    """Lowercase, collapse runs of other characters to '-', trim dashes. 'Hello World!' -> 'hello-world'."""
    return _NON_KEY_CHARS.sub("-", value.strip().lower()).strip("-")


def normalize_key(value: str, config: Config) -> str:
    """Apply parameterize_key() only when parameterize_keys is enabled."""
    return parameterize_key(value) if config.parameterize_keys else value
