"""Filter a list of paths by file properties, printing those that pass."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .args import UsageError, parse_flags

_FLAGS = "abcdefghlpqrsuvwx"
_USAGE = "usage: stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]"


@dataclass(frozen=True)
class Filter:
    """The set of tests to apply; ``newer_than``/``older_than`` are mtimes in seconds."""

    flags: frozenset[str] = frozenset()
    newer_than: int | None = None
    older_than: int | None = None

    def _passes(self, path: str, name: str, st: os.stat_result) -> bool:
        f = self.flags
        mode = st.st_mode
        mtime = int(st.st_mtime)
        checks = (
            lambda: "a" in f or not name.startswith("."),
            lambda: "b" not in f or stat.S_ISBLK(mode),
            lambda: "c" not in f or stat.S_ISCHR(mode),
            lambda: "d" not in f or stat.S_ISDIR(mode),
            lambda: "e" not in f or os.access(path, os.F_OK),
            lambda: "f" not in f or stat.S_ISREG(mode),
            lambda: "g" not in f or bool(mode & stat.S_ISGID),
            lambda: "h" not in f or _is_link(path),
            lambda: self.newer_than is None or mtime > self.newer_than,
            lambda: self.older_than is None or mtime < self.older_than,
            lambda: "p" not in f or stat.S_ISFIFO(mode),
            lambda: "r" not in f or os.access(path, os.R_OK),
            lambda: "s" not in f or st.st_size > 0,
            lambda: "u" not in f or bool(mode & stat.S_ISUID),
            lambda: "w" not in f or os.access(path, os.W_OK),
            lambda: "x" not in f or os.access(path, os.X_OK),
        )
        return all(check() for check in checks)

    def matches(self, path: str, name: str) -> bool:
        """Whether ``path`` passes every test, inverted by the 'v' flag."""
        try:
            st = os.stat(path)
        except (OSError, ValueError):
            passed = False
        else:
            passed = self._passes(path, name, st)
        return passed != ("v" in self.flags)

    def candidates(self, operands: list[str], stdin: Iterable[str]) -> Iterator[tuple[str, str]]:
        """Yield ``(path, name)`` pairs: lines of ``stdin`` if no operands, else
        the operands, or with the 'l' flag the contents of directories."""
        if not operands:
            for line in stdin:
                if not line:
                    continue
                if line.endswith("\n"):
                    line = line[:-1]
                yield line, line
            return
        for operand in operands:
            if "l" in self.flags:
                try:
                    entries = os.listdir(operand)
                except OSError:
                    entries = None
                if entries is not None:
                    for entry in (".", "..", *entries):
                        yield f"{operand}/{entry}", entry
                    continue
            yield operand, operand


def _is_link(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False


def _usage() -> int:
    print(_USAGE, file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    """Run the filter; exit status 0 if anything matched, 1 if not, 2 on misuse."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options, operands = parse_flags(args, "no")
    except UsageError:
        return _usage()

    flags: set[str] = set()
    times: dict[str, int | None] = {"n": None, "o": None}
    for flag, value in options:
        if flag in times:
            try:
                times[flag] = int(os.stat(value).st_mtime)
            except OSError as exc:
                print(f"{value}: {exc.strerror}", file=sys.stderr)
                times[flag] = None
        elif flag in _FLAGS:
            flags.add(flag)
        else:
            return _usage()

    filt = Filter(frozenset(flags), newer_than=times["n"], older_than=times["o"])
    matched = False
    for path, name in filt.candidates(operands, sys.stdin):
        if filt.matches(path, name):
            if "q" in flags:
                return 0
            matched = True
            print(name)
    return 0 if matched else 1