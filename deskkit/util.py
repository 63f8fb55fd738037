"""Diagnostics and human-readable number formatting shared by the tools."""

from __future__ import annotations

import os
import sys

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}


class FatalError(Exception):
    """An unrecoverable error; the command should exit with ``status``."""

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def _describe(message: str) -> str:
    """Append the reason for the exception being handled if ``message`` ends in ':'."""
    if not message.endswith(":"):
        return message
    exc = sys.exc_info()[1]
    if isinstance(exc, OSError) and exc.strerror:
        reason = exc.strerror
    elif exc is not None:
        reason = str(exc)
    else:
        reason = os.strerror(0)
    return f"{message} {reason}"


def warn(message: str) -> None:
    """Print a diagnostic to standard error.

    A message ending in ':' is followed by the description of the
    exception currently being handled.
    """
    print(_describe(message), file=sys.stderr)


def die(message: str) -> None:
    """Raise :class:`FatalError` carrying the diagnostic text."""
    raise FatalError(_describe(message))


def fmt_human(num: int, base: int) -> str | None:
    """Scale ``num`` by powers of ``base`` (1000 or 1024) and add a unit prefix."""
    prefixes = _PREFIXES.get(base)
    if prefixes is None:
        warn("fmt_human: Invalid base")
        return None
    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"