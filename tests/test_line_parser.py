"""Tests for the adaptive TSV line parser."""

import pytest

from makedict.errors import MalformedRecord
from makedict.line_parser import SPACE, TAB, LineParser, parse

from conftest import make_corpus


def collect(corpus, sample_stride=None):
    records = []
    parse(corpus, records.append, sample_stride=sample_stride)
    return records


class TestSplitting:
    def test_tab_separated(self):
        assert collect(b"casa\thouse\nlivro\tbook\n") == [("casa", "house"), ("livro", "book")]

    def test_blank_lines_skipped(self):
        corpus = b"\ncasa\thouse\n\n   \nlivro\tbook\n\n"
        assert collect(corpus) == [("casa", "house"), ("livro", "book")]

    def test_crlf_line_endings(self):
        assert collect(b"casa\thouse\r\nlivro\tbook\r\n") == [("casa", "house"), ("livro", "book")]

    def test_keeps_all_columns(self):
        assert collect(b"12\thouse\tcasa\n") == [("12", "house", "casa")]

    def test_empty_corpus(self):
        assert collect(b"") == []

    def test_utf8_decoded(self):
        assert collect("coração\theart\n".encode("utf-8")) == [("coração", "heart")]


class TestSeparatorFallback:
    def test_space_corpus_matches_tab_corpus(self, por_eng_rows):
        tabbed = collect(make_corpus(por_eng_rows, TAB))
        spaced = collect(make_corpus(por_eng_rows, SPACE))
        assert spaced == tabbed

    def test_switch_is_permanent(self):
        parser = LineParser()
        records = []
        # After the switch, the tab line no longer splits and has no space
        corpus = b"casa\thouse\nlivro book\ngato\tcat\n"
        with pytest.raises(MalformedRecord) as excinfo:
            parser.parse(corpus, records.append)

        assert parser.separator == SPACE
        assert records == [("casa", "house"), ("livro", "book")]
        assert excinfo.value.line_number == 3

    def test_tab_lines_with_spaces_after_switch(self):
        parser = LineParser()
        records = []
        parser.parse(b"livro book\ncasa grande\tbig house\n", records.append)
        assert records == [("livro", "book"), ("casa", "grande\tbig", "house")]

    def test_single_field_is_malformed(self):
        with pytest.raises(MalformedRecord) as excinfo:
            collect(b"casa\thouse\nlonely\n")
        assert excinfo.value.record == "lonely"
        assert excinfo.value.line_number == 2

    def test_parsers_do_not_share_state(self):
        first = LineParser()
        first.parse(b"livro book\n", lambda record: None)
        second = LineParser()
        assert first.separator == SPACE
        assert second.separator == TAB


class TestSampling:
    def test_stride_is_positional(self):
        rows = [(f"w{i}", f"v{i}") for i in range(10)]
        records = collect(make_corpus(rows), sample_stride=3)
        assert records == [("w0", "v0"), ("w3", "v3"), ("w6", "v6"), ("w9", "v9")]

    def test_stride_counts_non_blank_records(self):
        corpus = b"a\t1\n\n\nb\t2\nc\t3\n"
        assert collect(corpus, sample_stride=2) == [("a", "1"), ("c", "3")]

    @pytest.mark.parametrize("stride", [None, 0, 1])
    def test_no_sampling(self, stride):
        rows = [(f"w{i}", f"v{i}") for i in range(5)]
        assert len(collect(make_corpus(rows), sample_stride=stride)) == 5


class TestCallbackErrors:
    def test_callback_error_aborts(self):
        seen = []

        def on_record(record):
            seen.append(record)
            if len(seen) == 2:
                raise RuntimeError("stop")

        with pytest.raises(RuntimeError):
            parse(b"a\t1\nb\t2\nc\t3\n", on_record)
        assert len(seen) == 2
