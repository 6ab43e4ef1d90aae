import io

import pytest

from sed_engine.buffer import BufferReadError, LineBuffer


def test_from_text_terminates_every_line() -> None:
    buffer = LineBuffer.from_text("one\ntwo")

    assert list(buffer) == ["one\n", "two\n"]
    assert len(buffer) == 2
    assert buffer[1] == "two\n"


def test_from_text_keeps_blank_lines_and_drops_carriage_returns() -> None:
    assert LineBuffer.from_text("a\r\n\nb\n").lines == ("a\n", "\n", "b\n")


def test_empty_text_has_no_lines() -> None:
    assert len(LineBuffer.from_text("")) == 0


def test_from_stream_reads_everything() -> None:
    assert LineBuffer.from_stream(io.StringIO("x\ny\n")).lines == ("x\n", "y\n")


def test_from_files_concatenates_in_order(tmp_path) -> None:
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("a1\na2\n")
    second.write_text("b1")

    buffer = LineBuffer.from_files([first, second])

    assert buffer.lines == ("a1\n", "a2\n", "b1\n")


def test_from_files_names_undecodable_file(tmp_path) -> None:
    good = tmp_path / "good.txt"
    bad = tmp_path / "bad.txt"
    good.write_text("fine\n")
    bad.write_bytes(b"\xff\xfe\n")

    with pytest.raises(BufferReadError, match="bad.txt") as excinfo:
        LineBuffer.from_files([good, bad])

    assert excinfo.value.path == str(bad)
