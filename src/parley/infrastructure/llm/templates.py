"""Jinja2 template utilities for LLM components."""

import json
from typing import Any

from jinja2 import Environment, PackageLoader


def to_compact_json(value: Any) -> str:
    """Serialize a value as compact JSON for prompts.

    Args:
        value: JSON-serializable value.

    Returns:
        JSON string without extra whitespace; non-ASCII kept as is.
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for LLM templates.

    Creates a configured Jinja2 environment that loads templates from
    the parley.infrastructure.llm.templates package. Prompts are plain
    text, so autoescaping is disabled.

    Returns:
        Configured Jinja2 environment.
    """
    env = Environment(
        loader=PackageLoader("parley.infrastructure.llm", "templates"),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.filters["compact_json"] = to_compact_json
    return env
