"""Status components for files, commands, disks and the current user."""

from __future__ import annotations

import os
import pwd
import socket
import subprocess
import time

from .util import fmt_human, warn

_BUFSIZ = 1024


def _first_line(text: str) -> str | None:
    line = text[: _BUFSIZ - 2]
    newline = line.find("\n")
    if newline >= 0:
        line = line[:newline]
    return line or None


def cat(path: str) -> str | None:
    """The first line of the file at ``path``, or None if empty or unreadable."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            line = fp.readline(_BUFSIZ - 2)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    return _first_line(line)


def datetime(fmt: str) -> str | None:
    """The local time formatted with ``fmt``."""
    try:
        result = time.strftime(fmt, time.localtime())
    except ValueError:
        result = ""
    if not result or len(result.encode()) >= _BUFSIZ:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def _statvfs(path: str) -> os.statvfs_result | None:
    try:
        return os.statvfs(path)
    except OSError:
        warn(f"statvfs '{path}':")
        return None


def disk_free(path: str) -> str | None:
    """Space available to unprivileged users on the filesystem at ``path``."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: str) -> str | None:
    """Percentage of the filesystem at ``path`` that is in use."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: str) -> str | None:
    """Total size of the filesystem at ``path``."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: str) -> str | None:
    """Used space on the filesystem at ``path``."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def hostname(unused: str | None = None) -> str | None:
    """The host name of this machine."""
    try:
        return socket.gethostname()
    except OSError:
        warn("gethostname:")
        return None


def kernel_release(unused: str | None = None) -> str | None:
    """The kernel release, as ``uname -r`` prints it."""
    try:
        return os.uname().release
    except OSError:
        warn("uname:")
        return None


def num_files(path: str) -> str | None:
    """The number of entries in the directory at ``path``."""
    try:
        entries = os.listdir(path)
    except OSError:
        warn(f"opendir '{path}':")
        return None
    return str(len(entries))


def run_command(cmd: str) -> str | None:
    """The first line a shell command writes to standard output."""
    try:
        result = subprocess.run(cmd, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError:
        warn(f"popen '{cmd}':")
        return None
    return _first_line(result.stdout.decode("utf-8", errors="replace"))


def gid(unused: str | None = None) -> str:
    """The real group id of this process."""
    return str(os.getgid())


def uid(unused: str | None = None) -> str:
    """The effective user id of this process."""
    return str(os.geteuid())


def username(unused: str | None = None) -> str | None:
    """The login name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None