"""A stack of directory levels, as shown by a three column browser."""

from __future__ import annotations

from typing import Generic, TypeVar

from musicterm.directory import Dir
from musicterm.dirstate import DirState
from musicterm.items import ListItem, item_path

T = TypeVar("T")


class DirStack(Generic[T]):
    """The current directory, the directories above it and the selected path."""

    def __init__(self, root: list[T] | None = None) -> None:
        self.current: Dir[T] = Dir()
        self.others: list[Dir[T]] = []
        self.preview: list[ListItem] | None = None
        self._path: list[str] = []
        self.push([])
        self.current = Dir.from_items(list(root or []))

    @property
    def previous(self) -> Dir[T]:
        """The directory one level above the current one."""
        return self.others[-1]

    @property
    def path(self) -> list[str]:
        """Path components leading to the current directory."""
        return list(self._path)

    def next_path(self) -> list[str] | None:
        """Path of the selected entry, or None if nothing is selected."""
        selected = self.current.selected_item()
        if selected is None:
            return None
        return [*self._path, item_path(selected)]

    def push(self, head: list[T]) -> None:
        """Descend into a new level holding ``head``."""
        new_state = DirState()
        if head:
            new_state.select(0)
        new_state.set_content_len(len(head))

        selected = self.current.selected_item()
        if selected is not None:
            self._path.append(item_path(selected))

        self.others.append(Dir(items=self.current.items, state=self.current.state))
        self.current.items = list(head)
        self.current.state = new_state

    def pop(self) -> Dir[T] | None:
        """Go up one level and return the level left, keeping at least one above."""
        if len(self.others) <= 1:
            return None
        top = self.others.pop()
        if self._path:
            self._path.pop()
        popped, self.current = self.current, top
        return popped