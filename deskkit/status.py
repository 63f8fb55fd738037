"""A status line built from components, printed or set as the root window name."""

from __future__ import annotations

import os
import select
import signal
import socket
import subprocess
import sys
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .args import parse_flags
from .basic import datetime, run_command
from .memory import ram_perc
from .sysinfo import CpuPercent
from .util import FatalError, die, warn

VERSION = "1.0"
INTERVAL_MS = 1000
UNKNOWN_STR = "n/a"
MAXLEN = 2048
_USAGE = "usage: slstatus [-v] [-s] [-1]"


@dataclass(frozen=True)
class Component:
    """A function producing a value, the format it is shown with, and its argument."""

    func: Callable[[str | None], str | None]
    fmt: str
    args: str | None = None


def default_components() -> list[Component]:
    """The components shown when nothing else is configured."""
    return [
        Component(CpuPercent(), " CPU %s%%  "),
        Component(ram_perc, "RAM %s%%  "),
        Component(run_command, "VOL %s  ", "pamixer --get-volume-human"),
        Component(datetime, "%s ", "%F %T"),
    ]


def render_status(components: Iterable[Component], unknown: str = UNKNOWN_STR) -> str:
    """Join the formatted values of ``components``.

    A component without a value shows ``unknown``. Output stops before the
    first piece that would not fit in the line length limit.
    """
    parts: list[str] = []
    used = 0
    for component in components:
        value = component.func(component.args)
        if value is None:
            value = unknown
        piece = component.fmt % value
        size = len(piece.encode())
        if size >= MAXLEN - used:
            warn("vsnprintf: Output truncated")
            break
        parts.append(piece)
        used += size
    return "".join(parts)


class _SignalWatch:
    """Stop on SIGINT/SIGTERM; any of those or SIGUSR1 cuts a wait short."""

    def __init__(self) -> None:
        self.done = False
        self._previous: dict[int, object] = {}
        self._reader: socket.socket | None = None
        self._writer: socket.socket | None = None
        self._old_fd = -1

    def __enter__(self) -> _SignalWatch:
        if threading.current_thread() is not threading.main_thread():
            return self
        self._reader, self._writer = socket.socketpair()
        self._reader.setblocking(False)
        self._writer.setblocking(False)
        self._old_fd = signal.set_wakeup_fd(self._writer.fileno())
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._previous[signum] = signal.signal(signum, self._stop)
        self._previous[signal.SIGUSR1] = signal.signal(signal.SIGUSR1, self._refresh)
        return self

    def _stop(self, signum, frame) -> None:
        self.done = True

    def _refresh(self, signum, frame) -> None:
        """Only wakes the wait so the status is redrawn at once."""

    def sleep(self, seconds: float) -> None:
        if self._reader is None:
            time.sleep(seconds)
            return
        ready, _, _ = select.select([self._reader], [], [], seconds)
        if ready:
            try:
                while self._reader.recv(4096):
                    pass
            except (BlockingIOError, InterruptedError):
                pass

    def __exit__(self, *exc_info) -> None:
        for signum, handler in self._previous.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)
        if self._reader is not None:
            signal.set_wakeup_fd(self._old_fd)
            self._reader.close()
            self._writer.close()


def _print_status(status: str) -> None:
    try:
        print(status)
        sys.stdout.flush()
    except OSError:
        die("puts:")


def _set_root_name(status: str) -> None:
    try:
        subprocess.run(["xsetroot", "-name", status], check=True)
    except (OSError, subprocess.CalledProcessError):
        die("XStoreName:")


def _run(components: list[Component], emit: Callable[[str], None], once: bool) -> None:
    with _SignalWatch() as watch:
        watch.done = once
        while True:
            start = time.monotonic()
            emit(render_status(components))
            if not watch.done:
                remaining = INTERVAL_MS / 1000 - (time.monotonic() - start)
                if remaining > 0:
                    watch.sleep(remaining)
            if watch.done:
                break


def _main(args: list[str]) -> int:
    options, operands = parse_flags(args, "")
    to_stdout = False
    once = False
    for flag, _value in options:
        if flag == "v":
            die(f"slstatus-{VERSION}")
        elif flag == "1":
            once = True
            to_stdout = True
        elif flag == "s":
            to_stdout = True
        else:
            die(_USAGE)
    if operands:
        die(_USAGE)

    if not to_stdout and not os.environ.get("DISPLAY"):
        die("XOpenDisplay: Failed to open display")

    emit = _print_status if to_stdout else _set_root_name
    _run(default_components(), emit, once)

    if not to_stdout:
        try:
            subprocess.run(["xsetroot", "-name", ""], check=True)
        except (OSError, subprocess.CalledProcessError):
            die("XCloseDisplay: Failed to close display")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the status loop; -s prints to standard output, -1 prints once."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        return _main(args)
    except FatalError as exc:
        print(exc.message, file=sys.stderr)
        return exc.status