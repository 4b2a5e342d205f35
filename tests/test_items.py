from dataclasses import dataclass

import pytest

from musicterm.items import (
    DirStackItem,
    ListItem,
    item_matches,
    item_path,
    to_list_item,
)


@dataclass
class Track:
    file: str
    title: str

    def as_path(self) -> str:
        return self.file

    def matches(self, filter: str) -> bool:
        return filter.lower() in self.title.lower()

    def to_list_item(self, is_marked, filter, marker) -> ListItem:
        highlighted = filter is not None and self.matches(filter)
        return ListItem((marker if is_marked else "", self.title), highlighted)


def test_string_path_is_itself():
    assert item_path("music/album") == "music/album"


def test_string_matches_ignoring_case():
    assert item_matches("Hello World", "wORld") is True
    assert item_matches("Hello World", "xyz") is False


def test_string_matches_empty_filter():
    assert item_matches("anything", "") is True


def test_marked_string_list_item_has_marker():
    item = to_list_item("Song", True, None, ">")
    assert item.spans == (">", "Song")
    assert item.highlighted is False


def test_unmarked_string_list_item_pads_marker_width():
    item = to_list_item("Song", False, None, ">>")
    assert item.spans[0] == " " * len(">>")
    assert item.text.endswith("Song")
    assert len(item.text) == len(">>") + len("Song")


def test_string_list_item_highlighted_when_filter_matches():
    assert to_list_item("Song", False, "so", ">").highlighted is True
    assert to_list_item("Song", False, "zz", ">").highlighted is False


def test_protocol_item_is_dispatched():
    track = Track(file="a/b.flac", title="Blue")
    assert isinstance(track, DirStackItem)
    assert item_path(track) == "a/b.flac"
    assert item_matches(track, "BLU") is True
    assert to_list_item(track, True, "blue", "*") == ListItem(("*", "Blue"), True)


def test_unsupported_item_raises():
    with pytest.raises(TypeError):
        item_path(42)
    with pytest.raises(TypeError):
        item_matches(3.5, "x")