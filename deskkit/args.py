"""Parsing of single-letter command-line flags in the traditional style."""

from __future__ import annotations

from collections.abc import Iterable


class UsageError(Exception):
    """A flag that needs a value was given none."""


def parse_flags(
    argv: Iterable[str], takes_value: str
) -> tuple[list[tuple[str, str | None]], list[str]]:
    """Split ``argv`` (without the program name) into flags and operands.

    Flags may be grouped (``-ab``); a flag listed in ``takes_value`` takes
    the rest of its word or, failing that, the next word. ``--`` ends the
    flags, as does the first word not starting with '-' or a lone '-'.
    Returns ``(options, operands)`` where ``options`` is a list of
    ``(flag, value)`` pairs in the order given.
    """
    words = list(argv)
    options: list[tuple[str, str | None]] = []
    pos = 0
    while pos < len(words) and words[pos].startswith("-") and len(words[pos]) > 1:
        word = words[pos]
        pos += 1
        if word == "--":
            break
        for offset in range(1, len(word)):
            flag = word[offset]
            if flag not in takes_value:
                options.append((flag, None))
                continue
            rest = word[offset + 1:]
            if rest:
                options.append((flag, rest))
            elif pos < len(words):
                options.append((flag, words[pos]))
                pos += 1
            else:
                raise UsageError(f"option requires an argument -- '{flag}'")
            break
    return options, words[pos:]