"""Tests for the record and line iterators."""

import pytest

from limit_read._errors import InvalidDataError, SizeExceededError
from limit_read._iter import Lines, Split

SEMI = ord(";")


class TestSplit:
    """Tests for Split."""

    def test_scenario_second_record_too_long(self, scripted, ten_ones) -> None:
        records = Split(scripted(ten_ones(b";", 3, 8)), SEMI, 4)
        assert next(records) == b"\x01\x01\x01"
        with pytest.raises(SizeExceededError) as exc_info:
            next(records)
        # Counted from the start of this read, not of the source
        assert exc_info.value.length == 5
        with pytest.raises(StopIteration):
            next(records)

    def test_strips_delimiter(self, scripted) -> None:
        assert list(Split(scripted(b"a;bb;"), SEMI, 10)) == [b"a", b"bb"]

    def test_final_record_without_delimiter(self, scripted) -> None:
        assert list(Split(scripted(b"a;bb"), SEMI, 10)) == [b"a", b"bb"]

    def test_empty_records(self, scripted) -> None:
        assert list(Split(scripted(b";;x;"), SEMI, 10)) == [b"", b"", b"x"]

    def test_empty_source(self, scripted) -> None:
        assert list(Split(scripted(), SEMI, 10)) == []

    def test_records_across_chunks(self, scripted) -> None:
        source = scripted(b"al", b"pha;be", b"ta;", b"gam", b"ma")
        assert list(Split(source, SEMI, 10)) == [b"alpha", b"beta", b"gamma"]

    def test_unbounded_final_record(self, scripted) -> None:
        # The bound only applies where a delimiter is found
        records = list(Split(scripted(b"a;" + b"z" * 50), SEMI, 4))
        assert records == [b"a", b"z" * 50]

    def test_not_restartable(self, scripted) -> None:
        records = Split(scripted(b"a;b"), SEMI, 10)
        assert list(records) == [b"a", b"b"]
        assert list(records) == []

    def test_source_error_ends_iteration(self, scripted) -> None:
        records = Split(scripted(b"a;", OSError("boom"), b"b;"), SEMI, 10)
        assert next(records) == b"a"
        with pytest.raises(OSError, match="boom"):
            next(records)
        assert list(records) == []

    def test_abandoned_iterator_leaves_cursor(self, scripted) -> None:
        source = scripted(b"a;b;c;")
        records = Split(source, SEMI, 10)
        next(records)
        del records
        assert source.remaining() == b"b;c;"

    def test_bytes_delimiter(self, scripted) -> None:
        records = Split(scripted(b"a;bb;"), b";", 4)
        assert records.delimiter == SEMI
        assert list(records) == [b"a", b"bb"]

    @pytest.mark.parametrize("delimiter", [b";;", 300])
    def test_rejects_bad_delimiter(self, scripted, delimiter) -> None:
        with pytest.raises(ValueError):
            Split(scripted(), delimiter, 4)

    def test_rejects_negative_max_length(self, scripted) -> None:
        with pytest.raises(ValueError):
            Split(scripted(), SEMI, -1)

    def test_properties(self, scripted) -> None:
        records = Split(scripted(), SEMI, 7)
        assert records.delimiter == SEMI
        assert records.max_length == 7
        assert iter(records) is records


class TestLines:
    """Tests for Lines."""

    def test_scenario_second_line_too_long(self, scripted, ten_ones) -> None:
        lines = Lines(scripted(ten_ones(b"\n", 3, 8)), 4)
        assert next(lines) == "\x01\x01\x01"
        with pytest.raises(SizeExceededError):
            next(lines)
        with pytest.raises(StopIteration):
            next(lines)

    def test_lf_and_crlf(self, scripted) -> None:
        source = scripted(b"one\ntwo\r\nthree")
        assert list(Lines(source, 10)) == ["one", "two", "three"]

    def test_single_cr_stripped_once(self, scripted) -> None:
        assert list(Lines(scripted(b"a\r\r\n"), 10)) == ["a\r"]

    def test_cr_without_lf_kept(self, scripted) -> None:
        assert list(Lines(scripted(b"a\n\rb\r"), 10)) == ["a", "\rb\r"]

    def test_blank_lines(self, scripted) -> None:
        assert list(Lines(scripted(b"\n\r\n\n"), 10)) == ["", "", ""]

    def test_multibyte_split_across_chunks(self, scripted) -> None:
        source = scripted(b"caf\xc3", b"\xa9\n\xe2\x82", b"\xac\n")
        assert list(Lines(source, 10)) == ["café", "€"]

    def test_matches_split_for_valid_text(self, scripted) -> None:
        data = "α\nβγ\r\n\nδ".encode()
        lines = list(Lines(scripted(data), 16))
        records = list(Split(scripted(data), ord("\n"), 16))
        expected = [r[:-1] if r.endswith(b"\r") else r for r in records]
        assert lines == [r.decode() for r in expected]

    def test_invalid_utf8_ends_iteration(self, scripted) -> None:
        lines = Lines(scripted(b"ok\nbad\xff\nnext\n"), 10)
        assert next(lines) == "ok"
        with pytest.raises(InvalidDataError):
            next(lines)
        assert list(lines) == []

    def test_max_length_counts_terminator(self, scripted) -> None:
        lines = Lines(scripted(b"abc\r\n"), 4)
        with pytest.raises(SizeExceededError) as exc_info:
            next(lines)
        assert exc_info.value.length == 5

    def test_rejects_negative_max_length(self, scripted) -> None:
        with pytest.raises(ValueError):
            Lines(scripted(), -1)

    def test_empty_source(self, scripted) -> None:
        assert list(Lines(scripted(), 10)) == []
