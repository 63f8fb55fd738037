"""Layouts that place a monitor's tiled clients: master/stack tiling and monocle."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .clients import Client, Monitor, Screen

_LTSYMBOL_MAX = 15


@dataclass(frozen=True)
class Layout:
    """A layout symbol and the function that arranges a monitor's clients.

    A layout whose ``arrange`` is None leaves clients floating where they are.
    """

    symbol: str
    arrange: Callable[[Monitor, Screen], None] | None = None


def resize(client: Client, x: int, y: int, w: int, h: int, interact: bool, screen: Screen) -> bool:
    """Move and resize ``client`` within its size hints; returns whether it changed."""
    x, y, w, h, changed = client.apply_size_hints(x, y, w, h, interact, screen)
    if changed:
        client.oldx, client.x = client.x, x
        client.oldy, client.y = client.y, y
        client.oldw, client.w = client.w, w
        client.oldh, client.h = client.h, h
    return changed


def tile(monitor: Monitor, screen: Screen) -> None:
    """Master clients in a column on the left, the rest stacked on the right."""
    tiled = monitor.tiled()
    n = len(tiled)
    if n == 0:
        return
    if n > monitor.nmaster:
        master_width = int(monitor.ww * monitor.mfact) if monitor.nmaster else 0
    else:
        master_width = monitor.ww
    master_y = stack_y = 0
    masters = min(n, monitor.nmaster)
    for i, client in enumerate(tiled):
        if i < monitor.nmaster:
            h = (monitor.wh - master_y) // (masters - i)
            resize(
                client,
                monitor.wx,
                monitor.wy + master_y,
                master_width - 2 * client.bw,
                h - 2 * client.bw,
                False,
                screen,
            )
            if master_y + client.outer_height < monitor.wh:
                master_y += client.outer_height
        else:
            h = (monitor.wh - stack_y) // (n - i)
            resize(
                client,
                monitor.wx + master_width,
                monitor.wy + stack_y,
                monitor.ww - master_width - 2 * client.bw,
                h - 2 * client.bw,
                False,
                screen,
            )
            if stack_y + client.outer_height < monitor.wh:
                stack_y += client.outer_height


def monocle(monitor: Monitor, screen: Screen) -> None:
    """Every tiled client fills the window area; the symbol shows how many are visible."""
    visible = sum(1 for c in monitor.clients if monitor.is_visible(c))
    if visible > 0:
        monitor.ltsymbol = f"[{visible}]"[:_LTSYMBOL_MAX]
    for client in monitor.tiled():
        resize(
            client,
            monitor.wx,
            monitor.wy,
            monitor.ww - 2 * client.bw,
            monitor.wh - 2 * client.bw,
            False,
            screen,
        )


def default_layouts() -> list[Layout]:
    """Tiling (the default), floating and monocle."""
    return [
        Layout("[]=", tile),
        Layout("><>", None),
        Layout("[M]", monocle),
    ]