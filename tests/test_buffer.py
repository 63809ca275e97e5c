import pytest

from rsedit.buffer import NO_FILE, Buffer, FileInfo, Location
from rsedit.line import Line


def make_buffer(*texts):
    return Buffer(lines=[Line(text) for text in texts])


def texts(buffer):
    return [str(line) for line in buffer.lines]


def test_file_info_without_path_shows_placeholder():
    info = FileInfo()
    assert str(info) == "No file open"
    assert info.has_path() is False


def test_file_info_shows_file_name_only(tmp_path):
    info = FileInfo(tmp_path / "notes.txt")
    assert str(info) == "notes.txt"
    assert info.has_path() is True


def test_file_info_parent_reference_has_no_name():
    assert str(FileInfo("..")) == NO_FILE


def test_load_splits_lines_and_strips_crlf(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"first\r\nsecond\nthird\n")
    buffer = Buffer.load(path)
    assert texts(buffer) == ["first", "second", "third"]
    assert buffer.modified is False
    assert buffer.is_file_loaded() is True


def test_load_keeps_trailing_carriage_return_without_newline(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"a\nb\r")
    assert texts(Buffer.load(path)) == ["a", "b\r"]


def test_load_empty_file_is_empty(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("")
    buffer = Buffer.load(path)
    assert buffer.is_empty() is True
    assert buffer.height() == 0


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Buffer.load(tmp_path / "missing.txt")


def test_save_as_round_trip(tmp_path):
    buffer = make_buffer("one", "two", "")
    buffer.modified = True
    target = tmp_path / "out.txt"
    buffer.save_as(target)
    assert buffer.modified is False
    assert str(buffer.file_info) == "out.txt"
    assert texts(Buffer.load(target)) == ["one", "two", ""]


def test_save_writes_to_loaded_file(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("abc\n")
    buffer = Buffer.load(path)
    buffer.insert_char("x", Location(grapheme_index=0, line_index=0))
    assert buffer.modified is True
    buffer.save()
    assert buffer.modified is False
    assert path.read_text() == "xabc\n"


def test_insert_char_at_end_appends_new_line():
    buffer = make_buffer("a")
    buffer.insert_char("z", Location(grapheme_index=0, line_index=buffer.height()))
    assert texts(buffer) == ["a", "z"]
    assert buffer.modified is True


def test_insert_char_past_end_is_ignored():
    buffer = make_buffer("a")
    buffer.insert_char("z", Location(grapheme_index=0, line_index=5))
    assert texts(buffer) == ["a"]
    assert buffer.modified is False


def test_insert_line_splits_current_line():
    buffer = make_buffer("hello world")
    buffer.insert_line(Location(grapheme_index=len("hello"), line_index=0))
    assert texts(buffer) == ["hello", " world"]


def test_insert_line_at_end_adds_empty_line():
    buffer = make_buffer("a")
    buffer.insert_line(Location(grapheme_index=0, line_index=buffer.height()))
    assert texts(buffer) == ["a", ""]


def test_remove_char_inside_line():
    buffer = make_buffer("abc")
    buffer.remove_char(Location(grapheme_index=1, line_index=0))
    assert texts(buffer) == ["ac"]


def test_remove_char_at_line_end_joins_next_line():
    buffer = make_buffer("ab", "cd")
    buffer.remove_char(Location(grapheme_index=len("ab"), line_index=0))
    assert texts(buffer) == ["abcd"]
    assert buffer.modified is True


def test_remove_char_at_end_of_last_line_does_nothing():
    buffer = make_buffer("ab")
    buffer.remove_char(Location(grapheme_index=len("ab"), line_index=0))
    assert texts(buffer) == ["ab"]
    assert buffer.modified is False


def test_search_next_finds_following_line():
    buffer = make_buffer("x needle", "needle y")
    start = Location(grapheme_index="x needle".index("needle") + 1, line_index=0)
    assert buffer.search_next("needle", start) == Location(grapheme_index=0, line_index=1)


def test_search_next_wraps_around():
    buffer = make_buffer("x needle", "needle y")
    found = buffer.search_next("needle", Location(grapheme_index=1, line_index=1))
    assert found == Location(grapheme_index="x needle".index("needle"), line_index=0)


def test_search_previous_wraps_and_goes_back():
    buffer = make_buffer("x needle", "needle y")
    found = buffer.search_previous("needle", Location(grapheme_index=0, line_index=1))
    assert found == Location(grapheme_index="x needle".index("needle"), line_index=0)


def test_search_with_empty_query_or_no_match():
    buffer = make_buffer("abc")
    assert buffer.search_next("", Location()) is None
    assert buffer.search_previous("", Location()) is None
    assert buffer.search_next("zzz", Location()) is None
    assert Buffer().search_next("a", Location()) is None