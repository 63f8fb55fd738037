"""Clients, monitors and the geometry rules the window manager applies to them."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

BROKEN = "broken"
BORDER_PX = 1
SNAP = 32
SHOW_BAR = True
TOP_BAR = True
MFACT = 0.55
NMASTER = 1
RESIZE_HINTS = True
LOCK_FULLSCREEN = True
TAGS = ("1", "2", "3", "4", "5", "6", "7", "8", "9")
TAGMASK = (1 << len(TAGS)) - 1


def _fdiv(a: float, b: float) -> float:
    """Division that yields infinity or NaN for a zero divisor, as floats do."""
    if b:
        return a / b
    if a:
        return math.copysign(math.inf, a)
    return math.nan


def _cmod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend."""
    return int(math.fmod(a, b))


@dataclass
class Screen:
    """The display as a whole: its size, the bar height and the hint policy."""

    width: int
    height: int
    bar_height: int
    resize_hints: bool = RESIZE_HINTS


@dataclass(frozen=True)
class Rule:
    """Tags, floating state and monitor given to windows that match."""

    cls: str | None = None
    instance: str | None = None
    title: str | None = None
    tags: int = 0
    isfloating: bool = False
    monitor: int = -1


DEFAULT_RULES = (
    Rule(cls="Gimp", isfloating=True),
    Rule(cls="Firefox", tags=1 << 8),
)


@dataclass(frozen=True)
class SizeHints:
    """The normal size hints a window may set; absent hints are None.

    ``aspect`` holds the minimum and maximum aspect as ``((x, y), (x, y))``.
    """

    base: tuple[int, int] | None = None
    min_size: tuple[int, int] | None = None
    max_size: tuple[int, int] | None = None
    resize_inc: tuple[int, int] | None = None
    aspect: tuple[tuple[int, int], tuple[int, int]] | None = None


@dataclass(eq=False)
class Client:
    """A managed window and its geometry, hints and state."""

    window: int
    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    oldx: int = 0
    oldy: int = 0
    oldw: int = 0
    oldh: int = 0
    bw: int = 0
    oldbw: int = 0
    tags: int = 0
    mina: float = 0.0
    maxa: float = 0.0
    basew: int = 0
    baseh: int = 0
    incw: int = 0
    inch: int = 0
    maxw: int = 0
    maxh: int = 0
    minw: int = 0
    minh: int = 0
    hintsvalid: bool = False
    size_hints: SizeHints | None = None
    isfixed: bool = False
    isfloating: bool = False
    isurgent: bool = False
    neverfocus: bool = False
    oldstate: bool = False
    isfullscreen: bool = False
    mon: Monitor | None = None

    @property
    def outer_width(self) -> int:
        """Width including both borders."""
        return self.w + 2 * self.bw

    @property
    def outer_height(self) -> int:
        """Height including both borders."""
        return self.h + 2 * self.bw

    def set_size_hints(self, hints: SizeHints | None) -> None:
        """Record ``hints`` and derive the size limits from them."""
        self.size_hints = hints
        h = hints or SizeHints()
        if h.base is not None:
            self.basew, self.baseh = h.base
        elif h.min_size is not None:
            self.basew, self.baseh = h.min_size
        else:
            self.basew = self.baseh = 0
        if h.resize_inc is not None:
            self.incw, self.inch = h.resize_inc
        else:
            self.incw = self.inch = 0
        if h.max_size is not None:
            self.maxw, self.maxh = h.max_size
        else:
            self.maxw = self.maxh = 0
        if h.min_size is not None:
            self.minw, self.minh = h.min_size
        elif h.base is not None:
            self.minw, self.minh = h.base
        else:
            self.minw = self.minh = 0
        if h.aspect is not None:
            (min_x, min_y), (max_x, max_y) = h.aspect
            self.mina = _fdiv(min_y, min_x)
            self.maxa = _fdiv(max_x, max_y)
        else:
            self.mina = self.maxa = 0.0
        self.isfixed = bool(
            self.maxw and self.maxh and self.maxw == self.minw and self.maxh == self.minh
        )
        self.hintsvalid = True

    def apply_size_hints(
        self, x: int, y: int, w: int, h: int, interact: bool, screen: Screen
    ) -> tuple[int, int, int, int, bool]:
        """Constrain a requested geometry; returns it with whether it differs."""
        w = max(1, w)
        h = max(1, h)
        if interact:
            if x > screen.width:
                x = screen.width - self.outer_width
            if y > screen.height:
                y = screen.height - self.outer_height
            if x + w + 2 * self.bw < 0:
                x = 0
            if y + h + 2 * self.bw < 0:
                y = 0
        else:
            m = self.mon
            if x >= m.wx + m.ww:
                x = m.wx + m.ww - self.outer_width
            if y >= m.wy + m.wh:
                y = m.wy + m.wh - self.outer_height
            if x + w + 2 * self.bw <= m.wx:
                x = m.wx
            if y + h + 2 * self.bw <= m.wy:
                y = m.wy
        h = max(h, screen.bar_height)
        w = max(w, screen.bar_height)

        arranged = self.mon is not None and self.mon.arranges
        if screen.resize_hints or self.isfloating or not arranged:
            if not self.hintsvalid:
                self.set_size_hints(self.size_hints)
            baseismin = self.basew == self.minw and self.baseh == self.minh
            if not baseismin:
                w -= self.basew
                h -= self.baseh
            if self.mina > 0 and self.maxa > 0:
                if self.maxa < _fdiv(w, h):
                    w = int(h * self.maxa + 0.5)
                elif self.mina < _fdiv(h, w):
                    h = int(w * self.mina + 0.5)
            if baseismin:
                w -= self.basew
                h -= self.baseh
            if self.incw:
                w -= _cmod(w, self.incw)
            if self.inch:
                h -= _cmod(h, self.inch)
            w = max(w + self.basew, self.minw)
            h = max(h + self.baseh, self.minh)
            if self.maxw:
                w = min(w, self.maxw)
            if self.maxh:
                h = min(h, self.maxh)
        changed = x != self.x or y != self.y or w != self.w or h != self.h
        return x, y, w, h, changed


@dataclass(eq=False)
class Monitor:
    """A screen area with its bar, tag sets, layouts and clients.

    ``clients`` is in tiling order and ``stack`` in focus order, most
    recent first. ``layouts`` holds the two selectable layouts; a layout
    without an ``arrange`` function (or None) means floating.
    """

    num: int = 0
    mx: int = 0
    my: int = 0
    mw: int = 0
    mh: int = 0
    wx: int = 0
    wy: int = 0
    ww: int = 0
    wh: int = 0
    by: int = 0
    mfact: float = MFACT
    nmaster: int = NMASTER
    showbar: bool = SHOW_BAR
    topbar: bool = TOP_BAR
    seltags: int = 0
    sellt: int = 0
    tagset: list[int] = field(default_factory=lambda: [1, 1])
    layouts: list[Any] = field(default_factory=lambda: [None, None])
    ltsymbol: str = ""
    clients: list[Client] = field(default_factory=list)
    stack: list[Client] = field(default_factory=list)
    sel: Client | None = None
    barwin: int = 0

    @property
    def tags(self) -> int:
        """The tag set currently viewed."""
        return self.tagset[self.seltags]

    @property
    def layout(self) -> Any:
        """The selected layout."""
        return self.layouts[self.sellt]

    @property
    def arranges(self) -> bool:
        """Whether the selected layout positions clients itself."""
        return getattr(self.layout, "arrange", None) is not None

    def is_visible(self, client: Client) -> bool:
        """Whether ``client`` carries a tag that is being viewed."""
        return bool(client.tags & self.tagset[self.seltags])

    def update_bar_pos(self, bar_height: int) -> None:
        """Place the bar and shrink the window area to make room for it."""
        self.wy = self.my
        self.wh = self.mh
        if self.showbar:
            self.wh -= bar_height
            self.by = self.wy if self.topbar else self.wy + self.wh
            self.wy = self.wy + bar_height if self.topbar else self.wy
        else:
            self.by = -bar_height

    def tiled(self) -> list[Client]:
        """Visible, non-floating clients in tiling order."""
        return [c for c in self.clients if not c.isfloating and self.is_visible(c)]


def intersect(x: int, y: int, w: int, h: int, monitor: Monitor) -> int:
    """Area shared by a rectangle and the window area of ``monitor``."""
    dx = max(0, min(x + w, monitor.wx + monitor.ww) - max(x, monitor.wx))
    dy = max(0, min(y + h, monitor.wy + monitor.wh) - max(y, monitor.wy))
    return dx * dy


def rect_to_monitor(
    monitors: Iterable[Monitor], selected: Monitor, x: int, y: int, w: int, h: int
) -> Monitor:
    """The monitor a rectangle overlaps most, or ``selected`` if none."""
    best = selected
    area = 0
    for monitor in monitors:
        a = intersect(x, y, w, h, monitor)
        if a > area:
            area = a
            best = monitor
    return best


def apply_rules(
    client: Client,
    rules: Iterable[Rule],
    cls: str | None,
    instance: str | None,
    monitors: Sequence[Monitor],
    tagmask: int = TAGMASK,
) -> None:
    """Set floating state, tags and monitor of ``client`` from matching rules.

    ``client.mon`` must already be set; its viewed tags are used if no rule
    gives the client a tag.
    """
    cls = cls if cls is not None else BROKEN
    instance = instance if instance is not None else BROKEN
    client.isfloating = False
    client.tags = 0
    for rule in rules:
        if (
            (rule.title is None or rule.title in client.name)
            and (rule.cls is None or rule.cls in cls)
            and (rule.instance is None or rule.instance in instance)
        ):
            client.isfloating = rule.isfloating
            client.tags |= rule.tags
            target = next((m for m in monitors if m.num == rule.monitor), None)
            if target is not None:
                client.mon = target
    masked = client.tags & tagmask
    client.tags = masked if masked else client.mon.tagset[client.mon.seltags]