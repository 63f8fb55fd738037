"""Window manager state: monitors, managed clients, focus, tags and layouts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .clients import (
    BORDER_PX,
    BROKEN,
    DEFAULT_RULES,
    LOCK_FULLSCREEN,
    MFACT,
    NMASTER,
    RESIZE_HINTS,
    SHOW_BAR,
    SNAP,
    TAGS,
    TOP_BAR,
    Client,
    Monitor,
    Rule,
    Screen,
    SizeHints,
    apply_rules,
    rect_to_monitor,
)
from .layouts import Layout, default_layouts, resize

_LTSYMBOL_MAX = 15


@dataclass
class WindowConfig:
    """Appearance, tagging rules and layouts the window manager starts with."""

    border_px: int = BORDER_PX
    snap: int = SNAP
    show_bar: bool = SHOW_BAR
    top_bar: bool = TOP_BAR
    mfact: float = MFACT
    nmaster: int = NMASTER
    resize_hints: bool = RESIZE_HINTS
    lock_fullscreen: bool = LOCK_FULLSCREEN
    tags: tuple[str, ...] = TAGS
    rules: tuple[Rule, ...] = DEFAULT_RULES
    layouts: list[Layout] = field(default_factory=default_layouts)

    def __post_init__(self) -> None:
        if len(self.tags) > 31:
            raise ValueError("at most 31 tags fit in a tag mask")
        if not self.layouts:
            raise ValueError("at least one layout is needed")

    @property
    def tagmask(self) -> int:
        """A mask with one bit for every tag."""
        return (1 << len(self.tags)) - 1


class WindowManager:
    """The monitors and clients of one display and the operations on them."""

    def __init__(
        self,
        width: int,
        height: int,
        bar_height: int,
        config: WindowConfig | None = None,
        screens: Sequence[tuple[int, int, int, int]] | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.screen = Screen(width, height, bar_height, self.config.resize_hints)
        self.monitors: list[Monitor] = []
        self.selmon: Monitor | None = None
        self.pointer = (0, 0)
        self.update_geometry(screens)

    # monitors

    def _create_monitor(self) -> Monitor:
        layouts = self.config.layouts
        return Monitor(
            mfact=self.config.mfact,
            nmaster=self.config.nmaster,
            showbar=self.config.show_bar,
            topbar=self.config.top_bar,
            tagset=[1, 1],
            layouts=[layouts[0], layouts[1 % len(layouts)]],
            ltsymbol=layouts[0].symbol[:_LTSYMBOL_MAX],
        )

    def update_geometry(self, screens: Sequence[tuple[int, int, int, int]] | None) -> bool:
        """Match the monitors to ``screens`` given as ``(x, y, width, height)``.

        Without screens a single monitor covers the whole display. Returns
        whether any monitor changed.
        """
        dirty = False
        bh = self.screen.bar_height
        if screens:
            unique: list[tuple[int, int, int, int]] = []
            for geom in screens:
                if tuple(geom) not in unique:
                    unique.append(tuple(geom))
            n = len(self.monitors)
            nn = len(unique)
            for _ in range(n, nn):
                self.monitors.append(self._create_monitor())
            for i, (m, (x, y, w, h)) in enumerate(zip(self.monitors, unique)):
                if i >= n or (x, y, w, h) != (m.mx, m.my, m.mw, m.mh):
                    dirty = True
                    m.num = i
                    m.mx = m.wx = x
                    m.my = m.wy = y
                    m.mw = m.ww = w
                    m.mh = m.wh = h
                    m.update_bar_pos(bh)
            for _ in range(nn, n):
                m = self.monitors[-1]
                first = self.monitors[0]
                while m.clients:
                    dirty = True
                    c = m.clients.pop(0)
                    self._detach_stack(c)
                    c.mon = first
                    self._attach(c)
                    self._attach_stack(c)
                if m is self.selmon:
                    self.selmon = first
                self.monitors.pop()
        else:
            if not self.monitors:
                self.monitors.append(self._create_monitor())
            m = self.monitors[0]
            if m.mw != self.screen.width or m.mh != self.screen.height:
                dirty = True
                m.mw = m.ww = self.screen.width
                m.mh = m.wh = self.screen.height
                m.update_bar_pos(bh)
        if dirty:
            px, py = self.pointer
            self.selmon = rect_to_monitor(self.monitors, self.monitors[0], px, py, 1, 1)
        return dirty

    def dir_to_monitor(self, direction: int) -> Monitor:
        """The monitor after (> 0) or before the selected one, wrapping around."""
        index = self.monitors.index(self.selmon)
        if direction > 0:
            return self.monitors[(index + 1) % len(self.monitors)]
        return self.monitors[index - 1]

    # client lists

    @staticmethod
    def _attach(c: Client) -> None:
        c.mon.clients.insert(0, c)

    @staticmethod
    def _attach_stack(c: Client) -> None:
        c.mon.stack.insert(0, c)

    @staticmethod
    def _detach(c: Client) -> None:
        if c in c.mon.clients:
            c.mon.clients.remove(c)

    @staticmethod
    def _detach_stack(c: Client) -> None:
        m = c.mon
        if c in m.stack:
            m.stack.remove(c)
        if c is m.sel:
            m.sel = next((t for t in m.stack if m.is_visible(t)), None)

    def find_client(self, window: int) -> Client | None:
        """The managed client for ``window``, if any."""
        for m in self.monitors:
            for c in m.clients:
                if c.window == window:
                    return c
        return None

    # managing

    def manage(
        self,
        window: int,
        x: int,
        y: int,
        w: int,
        h: int,
        border_width: int = 0,
        cls: str | None = None,
        instance: str | None = None,
        name: str = "",
        transient_for: int | None = None,
        hints: SizeHints | None = None,
    ) -> Client:
        """Start managing a window and give it focus; returns its client."""
        c = Client(window=window, name=name or BROKEN)
        c.x = c.oldx = x
        c.y = c.oldy = y
        c.w = c.oldw = w
        c.h = c.oldh = h
        c.oldbw = border_width

        parent = self.find_client(transient_for) if transient_for is not None else None
        if parent is not None:
            c.mon = parent.mon
            c.tags = parent.tags
        else:
            c.mon = self.selmon
            apply_rules(c, self.config.rules, cls, instance, self.monitors, self.config.tagmask)

        m = c.mon
        if c.x + c.outer_width > m.wx + m.ww:
            c.x = m.wx + m.ww - c.outer_width
        if c.y + c.outer_height > m.wy + m.wh:
            c.y = m.wy + m.wh - c.outer_height
        c.x = max(c.x, m.wx)
        c.y = max(c.y, m.wy)
        c.bw = self.config.border_px

        c.set_size_hints(hints)
        if not c.isfloating:
            c.isfloating = c.oldstate = transient_for is not None or c.isfixed
        self._attach(c)
        self._attach_stack(c)
        m.sel = c
        self.arrange(m)
        self.focus(None)
        return c

    def unmanage(self, client: Client) -> None:
        """Stop managing ``client`` and refocus."""
        m = client.mon
        self._detach(client)
        self._detach_stack(client)
        self.focus(None)
        self.arrange(m)

    # arranging

    def _show_hide(self, m: Monitor) -> None:
        for c in m.stack:
            if m.is_visible(c) and (not m.arranges or c.isfloating) and not c.isfullscreen:
                resize(c, c.x, c.y, c.w, c.h, False, self.screen)

    def _arrange_monitor(self, m: Monitor) -> None:
        layout = m.layout
        m.ltsymbol = layout.symbol[:_LTSYMBOL_MAX]
        if layout.arrange is not None:
            layout.arrange(m, self.screen)

    def arrange(self, monitor: Monitor | None) -> None:
        """Lay out ``monitor``, or every monitor when None."""
        targets = [monitor] if monitor is not None else list(self.monitors)
        for m in targets:
            self._show_hide(m)
        for m in targets:
            self._arrange_monitor(m)

    def _resize_client(self, c: Client, x: int, y: int, w: int, h: int) -> None:
        c.oldx, c.x = c.x, x
        c.oldy, c.y = c.y, y
        c.oldw, c.w = c.w, w
        c.oldh, c.h = c.h, h

    # focus

    def focus(self, client: Client | None) -> None:
        """Focus ``client``, or the most recent visible client when it cannot be."""
        c = client
        if c is None or not c.mon.is_visible(c):
            m = self.selmon
            c = next((t for t in m.stack if m.is_visible(t)), None)
        if c is not None:
            if c.mon is not self.selmon:
                self.selmon = c.mon
            c.isurgent = False
            self._detach_stack(c)
            self._attach_stack(c)
        self.selmon.sel = c

    def focus_stack(self, direction: int) -> None:
        """Focus the next (> 0) or previous visible client in tiling order."""
        m = self.selmon
        sel = m.sel
        if sel is None or (sel.isfullscreen and self.config.lock_fullscreen):
            return
        index = m.clients.index(sel)
        visible = [c for c in m.clients if m.is_visible(c)]
        if direction > 0:
            after = [c for c in m.clients[index + 1:] if m.is_visible(c)]
            c = after[0] if after else (visible[0] if visible else None)
        else:
            before = [c for c in m.clients[:index] if m.is_visible(c)]
            if before:
                c = before[-1]
            else:
                rest = [c for c in m.clients[index:] if m.is_visible(c)]
                c = rest[-1] if rest else None
        if c is not None:
            self.focus(c)

    def focus_monitor(self, direction: int) -> None:
        """Select the next or previous monitor."""
        if len(self.monitors) < 2:
            return
        m = self.dir_to_monitor(direction)
        if m is self.selmon:
            return
        self.selmon = m
        self.focus(None)

    def send_to_monitor(self, client: Client, monitor: Monitor) -> None:
        """Move ``client`` to ``monitor``, taking the tags viewed there."""
        if client.mon is monitor:
            return
        self._detach(client)
        self._detach_stack(client)
        client.mon = monitor
        client.tags = monitor.tags
        self._attach(client)
        self._attach_stack(client)
        self.focus(None)
        self.arrange(None)

    def tag_monitor(self, direction: int) -> None:
        """Send the selected client to the next or previous monitor."""
        if self.selmon.sel is None or len(self.monitors) < 2:
            return
        self.send_to_monitor(self.selmon.sel, self.dir_to_monitor(direction))

    # tags

    def view(self, tags: int) -> None:
        """View ``tags``; zero switches back to the previous tag set."""
        m = self.selmon
        mask = self.config.tagmask
        if tags & mask == m.tags:
            return
        m.seltags ^= 1
        if tags & mask:
            m.tagset[m.seltags] = tags & mask
        self.focus(None)
        self.arrange(m)

    def toggle_view(self, tags: int) -> None:
        """Add or remove ``tags`` from the view, never leaving it empty."""
        m = self.selmon
        newtagset = m.tags ^ (tags & self.config.tagmask)
        if newtagset:
            m.tagset[m.seltags] = newtagset
            self.focus(None)
            self.arrange(m)

    def tag(self, tags: int) -> None:
        """Give the selected client exactly ``tags``."""
        m = self.selmon
        if m.sel is not None and tags & self.config.tagmask:
            m.sel.tags = tags & self.config.tagmask
            self.focus(None)
            self.arrange(m)

    def toggle_tag(self, tags: int) -> None:
        """Add or remove ``tags`` on the selected client, never leaving it untagged."""
        m = self.selmon
        if m.sel is None:
            return
        newtags = m.sel.tags ^ (tags & self.config.tagmask)
        if newtags:
            m.sel.tags = newtags
            self.focus(None)
            self.arrange(m)

    # layout parameters

    def set_layout(self, layout: Layout | None) -> None:
        """Select ``layout``; None switches to the other selectable layout."""
        m = self.selmon
        if layout is None or layout is not m.layout:
            m.sellt ^= 1
        if layout is not None:
            m.layouts[m.sellt] = layout
        m.ltsymbol = m.layout.symbol[:_LTSYMBOL_MAX]
        if m.sel is not None:
            self.arrange(m)

    def set_mfact(self, f: float) -> None:
        """Change the master area factor by ``f``; ``f`` above 1 sets it to ``f - 1``."""
        m = self.selmon
        if not m.arranges:
            return
        value = f + m.mfact if f < 1.0 else f - 1.0
        if value < 0.05 or value > 0.95:
            return
        m.mfact = value
        self.arrange(m)

    def inc_nmaster(self, n: int) -> None:
        """Change the number of master clients by ``n``, not below zero."""
        m = self.selmon
        m.nmaster = max(m.nmaster + n, 0)
        self.arrange(m)

    def toggle_floating(self) -> None:
        """Float or tile the selected client; fixed-size clients always float."""
        m = self.selmon
        c = m.sel
        if c is None or c.isfullscreen:
            return
        c.isfloating = not c.isfloating or c.isfixed
        if c.isfloating:
            resize(c, c.x, c.y, c.w, c.h, False, self.screen)
        self.arrange(m)

    def toggle_bar(self) -> None:
        """Show or hide the bar of the selected monitor."""
        m = self.selmon
        m.showbar = not m.showbar
        m.update_bar_pos(self.screen.bar_height)
        self.arrange(m)

    def zoom(self) -> None:
        """Make the selected tiled client the master, or swap in the next one."""
        m = self.selmon
        c = m.sel
        if not m.arranges or c is None or c.isfloating:
            return
        tiled = m.tiled()
        if tiled and c is tiled[0]:
            if len(tiled) < 2:
                return
            c = tiled[1]
        self._detach(c)
        self._attach(c)
        self.focus(c)
        self.arrange(c.mon)

    def set_fullscreen(self, client: Client, fullscreen: bool) -> None:
        """Cover the whole monitor with ``client`` or restore its former geometry."""
        c = client
        if fullscreen and not c.isfullscreen:
            c.isfullscreen = True
            c.oldstate = c.isfloating
            c.oldbw = c.bw
            c.bw = 0
            c.isfloating = True
            m = c.mon
            self._resize_client(c, m.mx, m.my, m.mw, m.mh)
        elif not fullscreen and c.isfullscreen:
            c.isfullscreen = False
            c.isfloating = c.oldstate
            c.bw = c.oldbw
            c.x, c.y, c.w, c.h = c.oldx, c.oldy, c.oldw, c.oldh
            self._resize_client(c, c.x, c.y, c.w, c.h)
            self.arrange(c.mon)