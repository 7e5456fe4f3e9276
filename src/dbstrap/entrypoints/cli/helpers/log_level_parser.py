"""Parsing of ``-L NAME=LEVEL`` logger-level options.

Values may be repeated on the command line or given as one comma/space
separated string (as read from ``DBSTRAP_LOGGER_LEVELS``).
"""

import logging
import re

import click

# Chatty libraries quieted unless overridden
DEFAULT_LIB_LEVELS = {
    "sqlalchemy": logging.WARNING,
    "docker": logging.WARNING,
    "urllib3": logging.WARNING,
}

SEPARATORS = re.compile(r"[,\s]+")


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Split a string or a sequence of strings into non-empty NAME=LEVEL items."""
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in SEPARATORS.split(chunk) if item]


def _to_level(level_str: str) -> int:
    level = getattr(logging, level_str.strip().upper(), None)
    if not isinstance(level, int):
        raise click.BadParameter(f"Invalid log level: {level_str}")
    return level


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback turning NAME=LEVEL items into a ``{name: level}`` dict.

    Overrides are applied on top of `DEFAULT_LIB_LEVELS`; later items win.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = _to_level(level_str)
    return levels
