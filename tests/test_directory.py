from musicterm.directory import Dir
from musicterm.dirstate import DirState


def create_subject() -> Dir[str]:
    res = Dir(items=["a", "b", "c", "d", "f"], state=DirState(), filter=None)
    res.state.set_content_len(len(res.items))
    res.state.set_viewport_len(len(res.items))
    return res


def test_selected_returns_none():
    subject = create_subject()
    subject.state.select(None)
    assert subject.selected_item() is None


def test_selected_returns_item():
    subject = create_subject()
    subject.state.select(2)
    assert subject.selected_item() == "c"


def test_selected_with_idx_returns_none():
    subject = create_subject()
    subject.state.select(None)
    assert subject.selected_with_idx() is None


def test_selected_with_idx_returns_item():
    subject = create_subject()
    subject.state.select(2)
    assert subject.selected_with_idx() == (2, "c")


def test_toggle_mark_selected_toggles_marks():
    subject = create_subject()
    subject.state.mark(2)
    subject.state.mark(1)
    subject.state.unmark(3)

    subject.state.select(2)
    subject.toggle_mark_selected()
    subject.state.select(3)
    subject.toggle_mark_selected()

    assert subject.marked == {1, 3}


def test_mark_selected_does_nothing_when_none_selected():
    subject = create_subject()
    assert subject.mark_selected() is False
    assert subject.marked == set()


def test_mark_selected_marks_selected():
    subject = create_subject()
    subject.state.mark(2)
    subject.state.select(3)
    subject.mark_selected()
    assert subject.marked == {2, 3}


def test_unmark_selected_does_nothing_when_none_selected():
    subject = create_subject()
    subject.state.mark(3)
    subject.unmark_selected()
    assert subject.marked == {3}


def test_unmark_selected_unmarks_selected():
    subject = create_subject()
    subject.state.mark(2)
    subject.state.mark(3)
    subject.state.select(2)
    subject.unmark_selected()
    assert subject.marked == {3}


def test_replace_selects_none_when_new_state_is_empty():
    subject = create_subject()
    subject.state.select(2)
    assert subject.selected_item() == "c"
    subject.replace([])
    assert subject.selected_item() is None


def test_replace_selects_first_element():
    subject = create_subject()
    subject.state.select(2)
    assert subject.selected_item() == "c"
    subject.replace(["q", "w", "f", "p", "b"])
    assert subject.selected_item() == "q"


def test_replace_selects_last_if_previous_selection_beyond_new_len():
    subject = create_subject()
    subject.state.select(4)
    assert subject.selected_item() == "f"
    subject.replace(["q", "w"])
    assert subject.selected_item() == "w"


def test_remove_does_nothing_when_outside_range():
    subject = create_subject()
    subject.state.mark(2)
    subject.state.mark(3)
    subject.remove(5)
    assert subject.marked == {2, 3}
    assert subject.items == ["a", "b", "c", "d", "f"]


def test_remove_removes_item():
    subject = create_subject()
    subject.state.mark(2)
    subject.state.mark(4)
    subject.remove(2)
    assert subject.marked == {3}
    assert subject.items == ["a", "b", "d", "f"]


def test_remove_all_marked_removes_every_marked_item():
    subject = create_subject()
    subject.state.mark(1)
    subject.state.mark(2)
    subject.state.mark(4)
    subject.remove_all_marked()
    assert subject.items == ["a", "d"]
    assert subject.marked == set()
    assert subject.state.content_len == 2


def test_jump_next_matching():
    val = Dir(items=["aa", "ab", "c", "ad"])
    val.state.set_viewport_len(2)
    val.state.set_content_len(len(val.items))
    val.state.select(0)
    val.filter = "a"

    val.jump_next_matching()
    assert val.state.selected == 1

    val.jump_next_matching()
    assert val.state.selected == 3


def test_jump_previous_matching():
    val = Dir(items=["aa", "ab", "c", "ad", "padding"])
    val.state.set_content_len(len(val.items))
    val.state.set_viewport_len(2)
    val.state.select(4)
    val.filter = "a"

    val.jump_previous_matching()
    assert val.state.selected == 3

    val.jump_previous_matching()
    assert val.state.selected == 1


def test_jump_without_filter_keeps_selection():
    subject = create_subject()
    subject.state.select(1)
    subject.jump_next_matching()
    assert subject.state.selected == 1
    subject.jump_previous_matching()
    assert subject.state.selected == 1


def test_jump_without_match_keeps_selection():
    subject = create_subject()
    subject.state.select(1)
    subject.filter = "zzz"
    subject.jump_next_matching()
    assert subject.state.selected == 1


def test_from_items_selects_first():
    subject = Dir.from_items(["x", "y"])
    assert subject.selected_with_idx() == (0, "x")
    assert subject.state.content_len == 2


def test_from_items_empty_selects_nothing():
    subject = Dir.from_items([])
    assert subject.selected_item() is None
    assert subject.items == []


def test_navigation_delegates_to_state():
    subject = Dir.from_items(["a", "b", "c"])
    subject.next()
    assert subject.selected_item() == "b"
    subject.last()
    assert subject.selected_item() == "c"
    subject.next()
    assert subject.selected_item() == "a"
    subject.prev()
    assert subject.selected_item() == "c"
    subject.first()
    assert subject.selected_item() == "a"
    subject.select_idx(10)
    assert subject.selected_item() == "c"


def test_half_viewport_navigation():
    subject = Dir.from_items([str(i) for i in range(20)])
    subject.state.set_viewport_len(10)
    subject.select_idx(8)
    subject.next_half_viewport()
    assert subject.state.selected == 13
    subject.prev_half_viewport()
    assert subject.state.selected == 8


def test_to_list_items_marks_and_highlights():
    subject = Dir.from_items(["abc", "xyz"])
    subject.state.mark(1)
    subject.filter = "ab"
    rows = subject.to_list_items(">")
    assert [row.spans for row in rows] == [(" ", "abc"), (">", "xyz")]
    assert [row.highlighted for row in rows] == [True, False]


def test_unmark_all_clears_marks():
    subject = create_subject()
    subject.state.mark(0)
    subject.state.mark(4)
    subject.unmark_all()
    assert subject.marked == set()