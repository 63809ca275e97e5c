import io

import pytest

from rsedit.buffer import Location
from rsedit.commands import Edit, EditAction, Move
from rsedit.geometry import Position, Size
from rsedit.terminal import Terminal
from rsedit.view import View


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def view(stream):
    result = View(Terminal(stream))
    result.resize(Size(width=80, height=9))
    return result


def type_text(view, text):
    for char in text:
        view.handle_edit_command(Edit(EditAction.INSERT_CHARACTER, char))


def lines(view):
    return [str(line) for line in view.buffer.lines]


def load(view, tmp_path, text):
    path = tmp_path / "doc.txt"
    path.write_text(text)
    view.load(path)
    return path


def test_status_of_empty_view(view):
    status = view.current_status()
    assert status.file_name == "No file open"
    assert status.lines_count == 0
    assert status.modified is False


def test_typing_moves_cursor(view):
    type_text(view, "ab")
    assert lines(view) == ["ab"]
    assert view.cursor_position() == Position(column=len("ab"), row=0)
    assert view.current_status().modified is True


def test_tab_inserts_four_spaces(view):
    view.handle_edit_command(Edit(EditAction.INSERT_TAB))
    assert lines(view) == ["    "]
    assert view.text_location.grapheme_index == len("    ")


def test_enter_splits_line_and_moves_down(view):
    type_text(view, "abcd")
    for _ in range(2):
        view.handle_move_command(Move.LEFT)
    view.handle_edit_command(Edit(EditAction.INSERT_LINE))
    assert lines(view) == ["ab", "cd"]
    assert view.text_location == Location(grapheme_index=0, line_index=1)


def test_backspace_at_line_start_joins_lines(view, tmp_path):
    load(view, tmp_path, "ab\ncd\n")
    view.handle_move_command(Move.DOWN)
    view.handle_edit_command(Edit(EditAction.DELETE_PREVIOUS))
    assert lines(view) == ["abcd"]
    assert view.text_location == Location(grapheme_index=len("ab"), line_index=0)


def test_backspace_at_document_start_does_nothing(view, tmp_path):
    load(view, tmp_path, "ab\n")
    view.handle_edit_command(Edit(EditAction.DELETE_PREVIOUS))
    assert lines(view) == ["ab"]
    assert view.current_status().modified is False


def test_delete_next_removes_character_under_cursor(view, tmp_path):
    load(view, tmp_path, "xyz\n")
    view.handle_edit_command(Edit(EditAction.DELETE_NEXT))
    assert lines(view) == ["yz"]


def test_move_down_stops_below_last_line(view, tmp_path):
    load(view, tmp_path, "a\nb\n")
    for _ in range(5):
        view.handle_move_command(Move.DOWN)
    assert view.text_location.line_index == view.buffer.height()
    assert view.text_location.grapheme_index == 0


def test_move_up_keeps_column_within_line(view, tmp_path):
    load(view, tmp_path, "ab\nlonger\n")
    view.handle_move_command(Move.DOWN)
    view.handle_move_command(Move.END_OF_LINE)
    view.handle_move_command(Move.UP)
    assert view.text_location == Location(grapheme_index=len("ab"), line_index=0)


def test_right_at_line_end_wraps_to_next_line(view, tmp_path):
    load(view, tmp_path, "ab\ncd\n")
    view.handle_move_command(Move.END_OF_LINE)
    view.handle_move_command(Move.RIGHT)
    assert view.text_location == Location(grapheme_index=0, line_index=1)
    view.handle_move_command(Move.LEFT)
    assert view.text_location == Location(grapheme_index=len("ab"), line_index=0)


def test_cursor_stays_on_screen_after_scrolling(view, tmp_path):
    load(view, tmp_path, "line\n" * 30)
    view.handle_move_command(Move.PAGE_DOWN)
    view.handle_move_command(Move.PAGE_DOWN)
    position = view.cursor_position()
    assert 0 <= position.row < view.size.height
    assert view.scroll_offset.row + position.row == view.text_location.line_index


def test_search_moves_to_match_and_dismiss_restores(view, tmp_path):
    load(view, tmp_path, "alpha\nbeta needle\ngamma\n")
    view.enter_search()
    view.search("needle")
    assert view.text_location == Location(
        grapheme_index="beta needle".index("needle"), line_index=1
    )
    view.dismiss_search()
    assert view.text_location == Location()
    assert view.search_info is None


def test_search_next_and_previous_cycle_matches(view, tmp_path):
    load(view, tmp_path, "x needle\nneedle y\n")
    view.enter_search()
    view.search("needle")
    first = view.text_location
    view.search_next()
    second = view.text_location
    assert second == Location(grapheme_index=0, line_index=1)
    view.search_previous()
    assert view.text_location == first


def test_exit_search_keeps_location(view, tmp_path):
    load(view, tmp_path, "abc needle\n")
    view.enter_search()
    view.search("needle")
    found = view.text_location
    view.exit_search()
    assert view.text_location == found
    assert view.search_info is None


def test_render_welcome_fits_width():
    assert View.render_welcome(0) == ""
    assert View.render_welcome(5) == "~"
    text = View.render_welcome(60)
    assert len(text) == 60
    assert text.startswith("~")
    assert "Welcome to Rsedit v1.5.1!" in text


def test_draw_empty_buffer_shows_welcome(view, stream):
    view.render(0)
    view.terminal.execute()
    output = stream.getvalue()
    assert "Welcome to Rsedit v" in output
    assert view.needs_redraw is False


def test_draw_shows_lines(view, stream, tmp_path):
    load(view, tmp_path, "hello there\n")
    assert view.needs_redraw is True
    view.render(0)
    view.terminal.execute()
    assert view.needs_redraw is False
    assert view.current_status().lines_count == 1
    output = stream.getvalue()
    assert "hello there" in output
    assert "Welcome" not in output


def test_save_as_updates_status(view, tmp_path):
    type_text(view, "hi")
    target = tmp_path / "saved.txt"
    view.save_as(target)
    assert target.read_text() == "hi\n"
    assert view.is_file_loaded() is True
    assert view.current_status().file_name == "saved.txt"
    assert view.current_status().modified is False