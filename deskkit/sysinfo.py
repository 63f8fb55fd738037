"""Status components for the processor, entropy pool, uptime, load and temperature."""

from __future__ import annotations

import os
import re
import time

from .util import fmt_human, warn

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"
PROC_STAT = "/proc/stat"

_UINT = re.compile(r"\s*\+?(\d+)")
_UPTIME_CLOCK = getattr(time, "CLOCK_BOOTTIME", time.CLOCK_MONOTONIC)


def _read_uint(path: str) -> int | None:
    try:
        with open(path, encoding="ascii", errors="replace") as fp:
            text = fp.read()
    except OSError:
        warn(f"fopen '{path}':")
        return None
    found = _UINT.match(text)
    return int(found.group(1)) if found else None


def cpu_freq(path: str = CPU_FREQ) -> str | None:
    """The current frequency of the first processor, read in kHz from ``path``."""
    freq = _read_uint(path)
    return None if freq is None else fmt_human(freq * 1000, 1000)


class CpuPercent:
    """Processor usage since the previous call, in percent.

    The first call only takes a sample and returns None.
    """

    def __init__(self, stat_path: str = PROC_STAT) -> None:
        self.stat_path = stat_path
        self._last = (0.0,) * 7

    def _sample(self) -> tuple[float, ...] | None:
        try:
            with open(self.stat_path, encoding="ascii", errors="replace") as fp:
                fields = fp.read().split()
        except OSError:
            warn(f"fopen '{self.stat_path}':")
            return None
        try:
            values = tuple(float(field) for field in fields[1:8])
        except ValueError:
            return None
        return values if len(values) == 7 else None

    def __call__(self, unused: str | None = None) -> str | None:
        before = self._last
        now = self._sample()
        if now is None:
            return None
        self._last = now
        if before[0] == 0:
            return None
        total = sum(before) - sum(now)
        if total == 0:
            return None
        busy_indices = (0, 1, 2, 5, 6)
        busy = sum(before[i] for i in busy_indices) - sum(now[i] for i in busy_indices)
        return str(int(100 * busy / total))


def entropy(path: str = ENTROPY_AVAIL) -> str | None:
    """The entropy available to the kernel's random pool."""
    num = _read_uint(path)
    return None if num is None else str(num)


def uptime(unused: str | None = None) -> str | None:
    """Time since boot as hours and minutes."""
    try:
        seconds = int(time.clock_gettime(_UPTIME_CLOCK))
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    return f"{seconds // 3600}h {seconds % 3600 // 60}m"


def load_avg(unused: str | None = None) -> str | None:
    """The 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def temp(file: str) -> str | None:
    """Temperature in degrees Celsius from a sensor file in millidegrees."""
    value = _read_uint(file)
    return None if value is None else str(value // 1000)