"""Unit tests for the compose form session."""

import pytest

from mbx.cli.tui.types import FormState
from mbx.cli.tui.views.compose import ComposeView
from mbx.constants import FROM_MAX_LEN, MESSAGE_MAX_LEN, SUBJECT_MAX_LEN


def _type(view: ComposeView, text: str) -> None:
    for ch in text:
        view.handle_key(ch)


def _focused(view: ComposeView) -> list[int]:
    return [i for i, f in enumerate(view.fields) if f.focused]


@pytest.mark.unit
def test_initial_focus_on_first_field():
    view = ComposeView()

    assert view.state is FormState.EDITING
    assert view.focus_index == 0
    assert _focused(view) == [0]
    assert view.result is None


@pytest.mark.unit
def test_typing_edits_only_focused_field():
    view = ComposeView()

    _type(view, "a@b.com")
    view.handle_key("tab")
    _type(view, "Hi")

    assert [f.value for f in view.fields] == ["a@b.com", "Hi", ""]


@pytest.mark.unit
def test_edit_keys_work_at_cursor_position():
    view = ComposeView()
    _type(view, "helo")

    view.handle_key("left")
    view.handle_key("l")
    assert view.fields[0].value == "hello"

    view.handle_key("home")
    view.handle_key("delete")
    assert view.fields[0].value == "ello"

    view.handle_key("end")
    view.handle_key("backspace")
    assert view.fields[0].value == "ell"

    view.handle_key("left")
    view.handle_key("ctrl+k")
    assert view.fields[0].value == "el"

    view.handle_key("ctrl+u")
    assert view.fields[0].value == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    ("index", "limit"),
    [(0, FROM_MAX_LEN), (1, SUBJECT_MAX_LEN), (2, MESSAGE_MAX_LEN)],
)
def test_field_length_limit_is_silent_noop(index, limit):
    view = ComposeView()
    view.set_focus(index)
    field = view.fields[index]
    field.value = "x" * limit
    field.cursor = limit

    view.handle_key("y")

    assert field.value == "x" * limit
    assert view.state is FormState.EDITING


@pytest.mark.unit
def test_prefill_longer_than_limit_is_truncated():
    view = ComposeView(sender="a" * 100)

    assert len(view.fields[0].value) == FROM_MAX_LEN


@pytest.mark.unit
@pytest.mark.parametrize("start", [0, 1, 2, 3, 4])
def test_forward_cycle_returns_to_start(start):
    view = ComposeView()
    view.set_focus(start)

    for _ in range(view.focus_slots):
        view.handle_key("tab")

    assert view.focus_index == start


@pytest.mark.unit
def test_focus_wraps_in_both_directions():
    view = ComposeView()

    view.handle_key("up")
    assert view.focus_index == 4

    view.handle_key("down")
    assert view.focus_index == 0

    view.handle_key("shift+tab")
    view.handle_key("ctrl+p")
    assert view.focus_index == 3


@pytest.mark.unit
def test_exactly_one_field_focused_while_cycling():
    view = ComposeView()

    for _ in range(12):
        view.handle_key("ctrl+n")
        expected = [view.focus_index] if view.focus_index < len(view.fields) else []
        assert _focused(view) == expected


@pytest.mark.unit
def test_enter_on_field_advances_focus():
    view = ComposeView()

    view.handle_key("enter")

    assert view.focus_index == 1
    assert view.state is FormState.EDITING


@pytest.mark.unit
def test_enter_on_cancel_exits_cancelled():
    view = ComposeView("a@b.com", "Hi", "")
    view.set_focus(view.cancel_index)

    view.handle_key("enter")

    assert view.state is FormState.CANCELLED
    assert view.result.entry is None
    assert view.result.submitted is False


@pytest.mark.unit
def test_enter_on_submit_packages_record():
    view = ComposeView()
    _type(view, "a@b.com")
    view.handle_key("tab")
    _type(view, "Hi")
    view.handle_key("tab")
    _type(view, "test")
    view.handle_key("tab")
    view.handle_key("tab")

    view.handle_key("enter")

    assert view.state is FormState.SUBMITTED
    entry = view.result.entry
    assert (entry.sender, entry.subject, entry.message) == ("a@b.com", "Hi", "test")


@pytest.mark.unit
def test_submit_does_not_validate_content():
    view = ComposeView()
    view.set_focus(view.submit_index)

    view.handle_key("enter")

    assert view.state is FormState.SUBMITTED
    assert view.result.entry.sender == ""


@pytest.mark.unit
@pytest.mark.parametrize("focus", [0, 2, 3, 4])
@pytest.mark.parametrize("key", ["esc", "ctrl+c"])
def test_abort_from_any_focus(focus, key):
    view = ComposeView()
    view.set_focus(focus)

    view.handle_key(key)

    assert view.state is FormState.CANCELLED


@pytest.mark.unit
def test_keys_after_exit_are_ignored():
    view = ComposeView()
    view.handle_key("esc")

    view.handle_key("a")

    assert view.fields[0].value == ""
    assert view.state is FormState.CANCELLED


@pytest.mark.unit
def test_render_marks_focused_button():
    view = ComposeView()
    lines = view.get_render_lines(80, 24)
    assert lines[0].startswith("From (email): ")
    assert "user@example.com" in lines[0]
    assert "[ Cancel ] [ Submit ]" in lines
    assert lines[-1] == "(enter & arrow keys, ctrl+c to exit)"

    view.set_focus(view.submit_index)
    buttons = view.get_render_segments(80, 24)[4]
    assert buttons[-1].text == "[ Submit ]"
