"""Terminal message helpers for the EVENTSITE CLI.

Each helper writes one styled line to stderr, so stdout stays free for JSON.
Emoji glyphs fall back to ASCII on terminals that cannot encode them.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if `character` can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str) -> str:
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line, e.g. ``⚠️  This will modify your database.``"""
    click.secho(f"{_glyph('⚠️', '[!]')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line, e.g. ``✅  Upgrade complete!``"""
    click.secho(f"{_glyph('✅', '[OK]')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line, e.g. ``❌  Cannot connect to database``"""
    click.secho(f"{_glyph('❌', '[X]')}  {msg}", fg="red", bold=True, err=True)
