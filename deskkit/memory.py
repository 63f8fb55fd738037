"""Status components for main memory and swap, read from /proc/meminfo."""

from __future__ import annotations

import re

from .util import fmt_human, warn

MEMINFO = "/proc/meminfo"

_RAM_FIELDS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
_SWAP_VALUE = re.compile(r"\s*([+-]?\d+)")


def _read(path: str) -> str | None:
    try:
        with open(path, encoding="ascii", errors="replace") as fp:
            return fp.read()
    except OSError:
        warn(f"fopen '{path}':")
        return None


def _leading_fields(meminfo: str | None, count: int) -> list[int] | None:
    """The first ``count`` memory fields, which must open the file in order.

    Returns fewer values if the file stops matching early, None if unreadable.
    """
    text = _read(meminfo or MEMINFO)
    if text is None:
        return None
    values: list[int] = []
    pos = 0
    for name in _RAM_FIELDS[:count]:
        found = re.compile(rf"\s*{name}:\s*(\d+)\s*kB").match(text, pos)
        if not found:
            break
        values.append(int(found.group(1)))
        pos = found.end()
    return values


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def ram_free(meminfo: str | None = None) -> str | None:
    """Memory available for new allocations."""
    values = _leading_fields(meminfo, 3)
    if values is None or len(values) != 3:
        return None
    return fmt_human(values[2] * 1024, 1024)


def ram_perc(meminfo: str | None = None) -> str | None:
    """Memory in use, not counting buffers and cache, in percent."""
    values = _leading_fields(meminfo, 5)
    if values is None or len(values) != 5:
        return None
    total, free, _available, buffers, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(meminfo: str | None = None) -> str | None:
    """Total memory."""
    values = _leading_fields(meminfo, 1)
    if not values:
        return None
    return fmt_human(values[0] * 1024, 1024)


def ram_used(meminfo: str | None = None) -> str | None:
    """Memory in use, not counting buffers and cache."""
    values = _leading_fields(meminfo, 5)
    if values is None or len(values) != 5:
        return None
    total, free, _available, buffers, cached = values
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def _swap_info(meminfo: str | None, *names: str) -> dict[str, int] | None:
    """The named swap fields, in kB, wherever they appear in the file."""
    text = _read(meminfo or MEMINFO)
    if text is None:
        return None
    wanted = set(names)
    found: dict[str, int] = {}
    for line in text.splitlines():
        if not wanted:
            break
        for name in tuple(wanted):
            if line.startswith(name):
                wanted.discard(name)
                value = _SWAP_VALUE.match(line, len(name) + 1)
                if value:
                    found[name] = int(value.group(1))
                break
    if len(found) != len(names):
        return None
    return found


def swap_free(meminfo: str | None = None) -> str | None:
    """Unused swap space."""
    info = _swap_info(meminfo, "SwapFree")
    return None if info is None else fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc(meminfo: str | None = None) -> str | None:
    """Swap in use, not counting swap cache, in percent."""
    info = _swap_info(meminfo, "SwapTotal", "SwapFree", "SwapCached")
    if info is None or info["SwapTotal"] == 0:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return str(_trunc_div(100 * used, info["SwapTotal"]))


def swap_total(meminfo: str | None = None) -> str | None:
    """Total swap space."""
    info = _swap_info(meminfo, "SwapTotal")
    return None if info is None else fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used(meminfo: str | None = None) -> str | None:
    """Swap in use, not counting swap cache."""
    info = _swap_info(meminfo, "SwapTotal", "SwapFree", "SwapCached")
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)