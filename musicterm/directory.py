"""A single level of a directory stack: its entries, selection and filter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from musicterm.dirstate import DirState
from musicterm.items import ListItem, item_matches, to_list_item

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Dir(Generic[T]):
    """Entries of one directory together with their selection state."""

    items: list[T] = field(default_factory=list)
    state: DirState = field(default_factory=DirState)
    filter: str | None = None

    @classmethod
    def from_items(cls, root: list[T]) -> Dir[T]:
        """Create a directory, selecting the first entry if there is one."""
        result: Dir[T] = cls()
        if root:
            result.state.select(0)
            result.state.set_content_len(len(root))
            result.items = list(root)
        return result

    def replace(self, new_current: list[T]) -> None:
        """Replace the entries, keeping the selection within the new range."""
        selected = self.state.selected
        if not new_current:
            self.state.select(None)
        elif selected is not None and selected > len(new_current) - 1:
            self.state.select(len(new_current) - 1)
        else:
            self.state.select(0)
        self.state.set_content_len(len(new_current))
        self.items = list(new_current)

    def to_list_items(self, marker: str) -> list[ListItem]:
        marked = self.state.marked
        return [
            to_list_item(item, i in marked, self.filter, marker)
            for i, item in enumerate(self.items)
        ]

    def selected_item(self) -> T | None:
        """Return the selected entry, or None."""
        found = self.selected_with_idx()
        return None if found is None else found[1]

    def selected_with_idx(self) -> tuple[int, T] | None:
        """Return the selected index and entry, or None."""
        sel = self.state.selected
        if sel is None or sel >= len(self.items):
            return None
        return sel, self.items[sel]

    @property
    def marked(self) -> set[int]:
        return self.state.marked

    def unmark_all(self) -> None:
        self.state.unmark_all()

    def toggle_mark_selected(self) -> bool:
        sel = self.state.selected
        return False if sel is None else self.state.toggle_mark(sel)

    def mark_selected(self) -> bool:
        sel = self.state.selected
        return False if sel is None else self.state.mark(sel)

    def unmark_selected(self) -> bool:
        sel = self.state.selected
        return False if sel is None else self.state.unmark(sel)

    def remove(self, idx: int) -> None:
        """Remove the entry at ``idx``; out-of-range indices are ignored."""
        if idx < len(self.items):
            del self.items[idx]
        self.state.remove(idx)

    def remove_all_marked(self) -> None:
        """Remove every marked entry."""
        for idx in sorted(self.state.marked, reverse=True):
            self.remove(idx)

    def next(self) -> None:
        self.state.next()

    def prev(self) -> None:
        self.state.prev()

    def select_idx(self, idx: int) -> None:
        self.state.select(idx)

    def next_half_viewport(self) -> None:
        self.state.next_half_viewport()

    def prev_half_viewport(self) -> None:
        self.state.prev_half_viewport()

    def last(self) -> None:
        self.state.last()

    def first(self) -> None:
        self.state.first()

    def _search_start(self) -> tuple[str, int] | None:
        if self.filter is None:
            log.warning("No filter set")
            return None
        selected = self.state.selected
        if selected is None:
            log.error("No song selected: %r", self.state)
            return None
        return self.filter, selected

    def jump_next_matching(self) -> None:
        """Select the next entry after the selection that matches the filter."""
        start = self._search_start()
        if start is None:
            return
        filter, selected = start
        length = len(self.items)
        for i in range(selected + 1, length + selected):
            i %= length
            if item_matches(self.items[i], filter):
                self.state.select(i)
                break

    def jump_previous_matching(self) -> None:
        """Select the nearest entry before the selection that matches the filter."""
        start = self._search_start()
        if start is None:
            return
        filter, selected = start
        length = len(self.items)
        for i in reversed(range(length)):
            i = (i + selected) % length
            if item_matches(self.items[i], filter):
                self.state.select(i)
                break