"""The state of a keyboard-driven selection menu: input, matching and paging."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

BUFSIZ = 8192
WORD_DELIMITERS = " "
DEFAULT_FONTS = ("monospace:size=10",)
DEFAULT_COLORS = {
    "norm": ("#bbbbbb", "#222222"),
    "sel": ("#eeeeee", "#005577"),
    "out": ("#000000", "#00ffff"),
}


def _fold(text: str) -> str:
    """Lower-case ``text`` one character at a time, keeping its length."""
    return "".join(low if len(low := ch.lower()) == 1 else ch for ch in text)


def cistrstr(haystack: str, needle: str) -> int | None:
    """Index of the first case-insensitive occurrence of ``needle``, or None."""
    index = _fold(haystack).find(_fold(needle))
    return None if index < 0 else index


def read_items(stream: Iterable[str]) -> list[Item]:
    """One item per line of ``stream``, without the trailing newline."""
    return [Item(line[:-1] if line.endswith("\n") else line) for line in stream]


@dataclass
class Item:
    """A menu entry; ``out`` marks an entry that has already been printed."""

    text: str
    out: bool = False


class Menu:
    """Input text, the items that match it and the page of them on display.

    ``matches`` lists the matching items; ``sel``, ``curr``, ``prev`` and
    ``next`` are indices into it (the selection, the first item shown, the
    first item of the previous page and of the next page), None where there
    is no such item.
    """

    def __init__(
        self,
        items: Iterable[Item],
        *,
        lines: int = 0,
        case_insensitive: bool = False,
        width: int = 0,
        prompt: str | None = None,
        text_width: Callable[[str], int] = len,
        pad: int = 0,
        bar_height: int = 1,
        delimiters: str = WORD_DELIMITERS,
    ) -> None:
        self.items = list(items)
        self.lines = max(0, min(lines, len(self.items)))
        self.case_insensitive = case_insensitive
        self.text_width = text_width
        self.pad = pad
        self.bar_height = bar_height
        self.delimiters = delimiters
        self.width = width
        self.prompt = prompt
        self.prompt_width = self._textw(prompt) - pad // 4 if prompt else 0
        self.input_width = width // 3
        self.text = ""
        self.cursor = 0
        self.matches: list[Item] = []
        self.sel: int | None = None
        self.curr: int | None = None
        self.prev: int | None = None
        self.next: int | None = None
        self.match()

    # widths

    def _textw(self, text: str) -> int:
        return self.text_width(text) + self.pad

    def _clamp_width(self, text: str, limit: int) -> int:
        if limit == 0:
            return 0
        width = self._textw(text)
        return width if limit < 0 else min(width, limit)

    # matching

    def _contains(self, text: str, token: str) -> bool:
        if self.case_insensitive:
            return cistrstr(text, token) is not None
        return token in text

    def _same(self, a: str, b: str) -> bool:
        return _fold(a) == _fold(b) if self.case_insensitive else a == b

    def _starts(self, text: str, prefix: str) -> bool:
        if self.case_insensitive:
            return _fold(text).startswith(_fold(prefix))
        return text.startswith(prefix)

    def match(self) -> None:
        """Recompute the matches: exact first, then prefixes, then substrings."""
        tokens = [tok for tok in self.text.split(" ") if tok]
        exact: list[Item] = []
        prefix: list[Item] = []
        substr: list[Item] = []
        for item in self.items:
            if not all(self._contains(item.text, tok) for tok in tokens):
                continue
            if not tokens or self._same(self.text, item.text):
                exact.append(item)
            elif self._starts(item.text, tokens[0]):
                prefix.append(item)
            else:
                substr.append(item)
        self.matches = exact + prefix + substr
        self.curr = self.sel = 0 if self.matches else None
        self.calcoffsets()

    def calcoffsets(self) -> None:
        """Find where the next page and the previous page begin."""
        if self.lines > 0:
            space = self.lines * self.bar_height
        else:
            space = self.width - (
                self.prompt_width + self.input_width + self._textw("<") + self._textw(">")
            )

        def size(index: int) -> int:
            if self.lines > 0:
                return self.bar_height
            return self._clamp_width(self.matches[index].text, space)

        if self.curr is None:
            self.next = self.prev = None
            return
        last = len(self.matches) - 1

        used = 0
        nxt: int | None = self.curr
        while nxt is not None:
            used += size(nxt)
            if used > space:
                break
            nxt = nxt + 1 if nxt < last else None
        self.next = nxt

        used = 0
        prev = self.curr
        while prev > 0:
            used += size(prev - 1)
            if used > space:
                break
            prev -= 1
        self.prev = prev

    # editing

    def _replace(self, start: int, end: int, new: str) -> None:
        self.text = self.text[:start] + new + self.text[end:]
        self.cursor = start + len(new)
        self.match()

    def insert(self, s: str) -> None:
        """Insert ``s`` at the cursor unless the input would grow too long."""
        if len(self.text.encode()) + len(s.encode()) > BUFSIZ - 1:
            return
        self._replace(self.cursor, self.cursor, s)

    def backspace(self) -> None:
        """Delete the character before the cursor."""
        if self.cursor == 0:
            return
        self._replace(self.cursor - 1, self.cursor, "")

    def delete(self) -> None:
        """Delete the character under the cursor."""
        if self.cursor >= len(self.text):
            return
        self._replace(self.cursor, self.cursor + 1, "")

    def kill_to_end(self) -> None:
        """Delete from the cursor to the end of the input."""
        self.text = self.text[: self.cursor]
        self.match()

    def kill_to_start(self) -> None:
        """Delete from the start of the input to the cursor."""
        self._replace(0, self.cursor, "")

    def _word_start(self) -> int:
        pos = self.cursor
        while pos > 0 and self.text[pos - 1] in self.delimiters:
            pos -= 1
        while pos > 0 and self.text[pos - 1] not in self.delimiters:
            pos -= 1
        return pos

    def delete_word(self) -> None:
        """Delete the word before the cursor and the delimiters after it."""
        start = self._word_start()
        if start != self.cursor:
            self._replace(start, self.cursor, "")

    def move_word(self, direction: int) -> None:
        """Move the cursor to the start (< 0) or the end (> 0) of a word."""
        if direction < 0:
            self.cursor = self._word_start()
            return
        pos = self.cursor
        while pos < len(self.text) and self.text[pos] in self.delimiters:
            pos += 1
        while pos < len(self.text) and self.text[pos] not in self.delimiters:
            pos += 1
        self.cursor = pos

    # navigation

    def left(self) -> None:
        """Move the cursor left, or the selection when the cursor cannot."""
        if self.cursor > 0 and (not self.sel or self.lines > 0):
            self.cursor -= 1
            return
        if self.lines > 0:
            return
        self.up()

    def right(self) -> None:
        """Move the cursor right, or the selection at the end of the input."""
        if self.cursor < len(self.text):
            self.cursor += 1
            return
        if self.lines > 0:
            return
        self.down()

    def up(self) -> None:
        """Select the previous match, turning the page if needed."""
        if self.sel is None or self.sel == 0:
            return
        self.sel -= 1
        if self.sel + 1 == self.curr:
            self.curr = self.prev
            self.calcoffsets()

    def down(self) -> None:
        """Select the next match, turning the page if needed."""
        if self.sel is None or self.sel + 1 >= len(self.matches):
            return
        self.sel += 1
        if self.sel == self.next:
            self.curr = self.next
            self.calcoffsets()

    def home(self) -> None:
        """Select the first match; if it already is, move the cursor to the start."""
        if self.sel == (0 if self.matches else None):
            self.cursor = 0
            return
        self.sel = self.curr = 0
        self.calcoffsets()

    def end(self) -> None:
        """Move the cursor to the end; if it already is, select the last match."""
        if self.cursor < len(self.text):
            self.cursor = len(self.text)
            return
        last = len(self.matches) - 1 if self.matches else None
        if self.next is not None and last is not None:
            self.curr = last
            self.calcoffsets()
            self.curr = self.prev
            self.calcoffsets()
            while self.next is not None and self.curr + 1 <= last:
                self.curr += 1
                self.calcoffsets()
        self.sel = last

    def page_next(self) -> None:
        """Show and select the first item of the next page."""
        if self.next is None:
            return
        self.sel = self.curr = self.next
        self.calcoffsets()

    def page_prev(self) -> None:
        """Show and select the first item of the previous page."""
        if self.prev is None:
            return
        self.sel = self.curr = self.prev
        self.calcoffsets()

    def complete(self) -> None:
        """Replace the input with the text of the selected item."""
        if self.sel is None:
            return
        text = self.matches[self.sel].text
        data = text.encode()[: BUFSIZ - 1]
        self.text = data.decode(errors="ignore")
        self.cursor = len(self.text)
        self.match()

    @property
    def selected(self) -> Item | None:
        """The selected item, if any."""
        return None if self.sel is None else self.matches[self.sel]

    def visible(self) -> list[Item]:
        """The items on the page being shown."""
        if self.curr is None:
            return []
        return self.matches[self.curr : self.next]