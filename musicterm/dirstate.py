"""Selection, marking and scrolling state for a list of entries."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScrollbarState:
    """Position and extent information used to draw a scrollbar."""

    content_length: int = 0
    viewport_content_length: int = 0
    position: int = 0


@dataclass
class DirState:
    """Tracks the selected entry, marked entries and list dimensions."""

    marked: set[int] = field(default_factory=set)
    scrollbar: ScrollbarState = field(default_factory=ScrollbarState)
    _selected: int | None = None
    _content_len: int | None = None
    _viewport_len: int | None = None

    @property
    def selected(self) -> int | None:
        """Index of the selected entry, or None."""
        return self._selected

    @property
    def content_len(self) -> int | None:
        return self._content_len

    @property
    def viewport_len(self) -> int | None:
        return self._viewport_len

    def set_viewport_len(self, viewport_len: int | None) -> DirState:
        self._viewport_len = viewport_len
        self.scrollbar.viewport_content_length = viewport_len or 0
        return self

    def set_content_len(self, content_len: int | None) -> DirState:
        self._content_len = content_len
        self.scrollbar.content_length = content_len or 0
        return self

    def first(self) -> None:
        if self._content_len:
            self.select(0)
        else:
            self.select(None)

    def last(self) -> None:
        if self._content_len:
            self.select(self._content_len - 1)
        else:
            self.select(None)

    def next(self) -> None:
        count = self._content_len
        if count is None:
            self.select(None)
            return
        current = self._selected
        if current is not None:
            self.select(0 if current >= max(count - 1, 0) else current + 1)
        elif count > 0:
            self.select(0)
        else:
            self.select(None)

    def prev(self) -> None:
        count = self._content_len
        if count is None:
            self.select(None)
            return
        current = self._selected
        if current is not None:
            self.select(max(count - 1, 0) if current == 0 else current - 1)
        elif count > 0:
            self.select(max(count - 1, 0))
        else:
            self.select(None)

    def next_half_viewport(self) -> None:
        count = self._content_len
        viewport = self._viewport_len
        if count is None or viewport is None:
            self.select(None)
            return
        current = self._selected
        if current is None:
            self.select(None)
        else:
            self.select(min(current + viewport // 2, max(count - 1, 0)))

    def prev_half_viewport(self) -> None:
        viewport = self._viewport_len
        if self._content_len is None or viewport is None:
            self.select(None)
            return
        current = self._selected
        if current is None:
            self.select(None)
        else:
            self.select(max(current - viewport // 2, 0))

    def select(self, idx: int | None) -> None:
        """Select ``idx``, clamped into the content range; None clears it."""
        if idx is not None:
            upper = max((self._content_len or 0) - 1, 0)
            idx = min(max(idx, 0), upper)
        self._selected = idx
        self.scrollbar.position = idx or 0

    def remove(self, idx: int) -> None:
        """Account for removal of the entry at ``idx``, shifting marks."""
        length = self._content_len
        if length is None or idx >= length:
            return
        self.marked = {
            value if value < idx else value - 1
            for value in self.marked
            if value != idx
        }
        self._content_len = length - 1
        if self._selected is not None and self._selected >= self._content_len:
            self.last()

    def unmark_all(self) -> None:
        self.marked.clear()

    def mark(self, idx: int) -> bool:
        """Mark ``idx``; return True if it was not marked before."""
        if idx in self.marked:
            return False
        self.marked.add(idx)
        return True

    def unmark(self, idx: int) -> bool:
        """Unmark ``idx``; return True if it was marked."""
        if idx not in self.marked:
            return False
        self.marked.discard(idx)
        return True

    def toggle_mark(self, idx: int) -> bool:
        if idx in self.marked:
            return self.unmark(idx)
        return self.mark(idx)