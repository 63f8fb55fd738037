"""Status components for the battery, read from the power-supply class in sysfs."""

from __future__ import annotations

import os
import re

from .util import warn

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_INT = re.compile(r"\s*([+-]?\d+)")
_UINT = re.compile(r"\s*\+?(\d+)")
_STATE = re.compile(r"([a-zA-Z ]{1,12})")


def _scan(path: str, pattern: re.Pattern[str]) -> str | None:
    """The first group ``pattern`` matches at the start of the file, or None."""
    try:
        with open(path, encoding="ascii", errors="replace") as fp:
            text = fp.read()
    except OSError:
        warn(f"fopen '{path}':")
        return None
    found = pattern.match(text)
    return found.group(1) if found else None


def _path(root: str, bat: str, name: str) -> str:
    return os.path.join(root, bat, name)


def _pick(root: str, bat: str, *names: str) -> str | None:
    """The first of the named files of ``bat`` that can be read."""
    for name in names:
        path = _path(root, bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _state(bat: str, root: str) -> str | None:
    return _scan(_path(root, bat, "status"), _STATE)


def battery_perc(bat: str, root: str = POWER_SUPPLY) -> str | None:
    """The charge of battery ``bat`` in percent."""
    value = _scan(_path(root, bat, "capacity"), _INT)
    return None if value is None else str(int(value))


def battery_state(bat: str, root: str = POWER_SUPPLY) -> str | None:
    """'+' when charging, '-' when discharging, 'o' when full, '?' otherwise."""
    state = _state(bat, root)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, root: str = POWER_SUPPLY) -> str | None:
    """Time left on battery as hours and minutes; empty unless discharging."""
    state = _state(bat, root)
    if state is None:
        return None

    charge_path = _pick(root, bat, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge = _scan(charge_path, _UINT)
    if charge is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(root, bat, "current_now", "power_now")
    if current_path is None:
        return None
    current = _scan(current_path, _UINT)
    if current is None or int(current) == 0:
        return None

    timeleft = int(charge) / int(current)
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"