"""Entries that can be shown in a directory stack and their list rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable


@dataclass(frozen=True)
class ListItem:
    """One rendered row of a list: its text spans and whether it is highlighted."""

    spans: tuple[str, ...]
    highlighted: bool = False

    @property
    def text(self) -> str:
        """The row's full text."""
        return "".join(self.spans)


@runtime_checkable
class DirStackItem(Protocol):
    """Behaviour an entry needs to live in a directory stack."""

    def as_path(self) -> str:
        ...

    def matches(self, filter: str) -> bool:
        ...

    def to_list_item(self, is_marked: bool, filter: str | None, marker: str) -> ListItem:
        ...


Item = Union[str, DirStackItem]


def _ensure_item(item: object) -> DirStackItem:
    if isinstance(item, DirStackItem):
        return item
    raise TypeError(f"{type(item).__name__} cannot be used as a directory stack entry")


def item_path(item: Item) -> str:
    """Return the path component the entry stands for."""
    if isinstance(item, str):
        return item
    return _ensure_item(item).as_path()


def item_matches(item: Item, filter: str) -> bool:
    """Return True if the entry matches ``filter``, ignoring case."""
    if isinstance(item, str):
        return filter.lower() in item.lower()
    return _ensure_item(item).matches(filter)


def to_list_item(item: Item, is_marked: bool, filter: str | None, marker: str) -> ListItem:
    """Render the entry as a list row, prefixed by the marker or blank padding."""
    if not isinstance(item, str):
        return _ensure_item(item).to_list_item(is_marked, filter, marker)
    marker_span = marker if is_marked else " " * len(marker)
    highlighted = filter is not None and item_matches(item, filter)
    return ListItem((marker_span, item), highlighted)