"""Terminal message helpers for the DBSTRAP CLI.

Each helper prints one styled line to **stderr**, leaving stdout to the
spawned ``docker`` processes. Emoji glyphs fall back to ASCII when stderr
cannot encode them.
"""

import click

SUCCESS_GLYPHS = ("✅", "[OK]")  # pragma: no mutate
CAUTION_GLYPHS = ("⚠️", "[!]")  # pragma: no mutate
ERROR_GLYPHS = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on the current stderr.

    The stream is looked up on every call, so a redirected or replaced
    stderr is always honoured.
    """
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding")
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(glyphs: tuple[str, str]) -> str:
    emoji, fallback = glyphs
    return emoji if _supports_character(emoji) else fallback


def success_glyph() -> str:
    """Return "✅", or "[OK]" when stderr cannot encode it."""
    return _glyph(SUCCESS_GLYPHS)


def caution_glyph() -> str:
    """Return "⚠️", or "[!]" when stderr cannot encode it."""
    return _glyph(CAUTION_GLYPHS)


def error_glyph() -> str:
    """Return "❌", or "[X]" when stderr cannot encode it."""
    return _glyph(ERROR_GLYPHS)


def success(msg: str) -> None:
    """Print a green, bold line such as ``✅  Seeded dbstrap-postgres.``"""
    click.secho(f"{success_glyph()}  {msg}", fg="green", bold=True, err=True)


def warn(msg: str) -> None:
    """Print a yellow, bold line such as ``⚠️  Container already running.``"""
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Print a red, bold line such as ``❌  Cannot connect to database.``"""
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
