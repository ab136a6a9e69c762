"""Tests for the frequency-ranked dictionary index."""

import pytest

from makedict.errors import MalformedRecord
from makedict.languages import LanguagePair
from makedict.merge_index import DictionaryIndex, Suggestion

from conftest import make_corpus


PAIR = LanguagePair("por", "eng")
MAPPING = {"por": 0, "eng": 1}


@pytest.fixture
def index():
    return DictionaryIndex.for_pair(PAIR)


class TestAddVariant:
    def test_repeat_raises_score_not_entries(self, index):
        index.add_variant("permitindo", "allowing")
        before = index.lookup("permitindo")[0].score
        index.add_variant("permitindo", "allowing")
        index.add_variant("permitindo", "allowing")

        suggestions = index.lookup("permitindo")
        assert len(suggestions) == 1
        assert suggestions[0].score == before + 2

    def test_variant_scores(self, index):
        for variant in ["allowing", "letting", "permitting", "allowing", "letting", "allowing"]:
            index.add_variant("permitindo", variant)

        assert index.lookup("permitindo") == [
            Suggestion("allowing", 3),
            Suggestion("letting", 2),
            Suggestion("permitting", 1),
        ]


class TestLookup:
    def test_ranking_order(self, index):
        rows = [("hola", "hello"), ("hola", "hello"), ("hola", "hi")]
        index.ingest(make_corpus(rows), MAPPING)
        assert index.lookup("hola") == [("hello", 2), ("hi", 1)]

    def test_ties_break_lexically(self, index):
        for variant in ["zebra", "apple", "mango"]:
            index.add_variant("x", variant)
        assert [s.variant for s in index.lookup("x")] == ["apple", "mango", "zebra"]

    def test_absent_word(self, index):
        assert index.lookup("nothing") == []
        assert not index.exists("nothing")


class TestIngest:
    def test_lowercases_words_and_variants(self, index):
        index.ingest(b"Casa\tHOUSE\ncasa\thouse\n", MAPPING)
        assert index.lookup("casa") == [("house", 2)]
        assert index.size() == 1

    def test_queries_normalize_the_word(self, index):
        index.ingest(b"casa\thouse\n", MAPPING)
        assert index.lookup("Casa") == [("house", 1)]
        assert index.lookup(" CASA ") == [("house", 1)]
        assert index.exists("Casa")
        assert "CASA" in index

    def test_tab_inside_space_separated_field_is_collapsed(self, index):
        index.ingest(b"livro book\ncasa big\thouse x\n", MAPPING)
        assert index.lookup("casa") == [("big house", 1)]
        assert list(index.export_lines()) == ["casa\tbig house\t1", "livro\tbook\t1"]

    def test_uses_mapping_columns(self, index):
        corpus = make_corpus([("7", "house", "casa"), ("3", "home", "casa")])
        index.ingest(corpus, {"eng": 1, "por": 2})
        assert index.lookup("casa") == [("home", 1), ("house", 1)]

    def test_explicit_languages(self, index):
        index.ingest(b"house\tcasa\n", {"xx": 1, "yy": 0}, "xx", "yy")
        assert index.lookup("casa") == [("house", 1)]

    def test_size_and_exists(self, index, por_eng_rows, por_eng_corpus):
        index.ingest(por_eng_corpus, MAPPING)
        words = {por for por, _ in por_eng_rows}
        assert index.size() == len(words)
        assert len(index) == len(words)
        for word in words:
            assert index.exists(word)
            assert word in index

    def test_out_of_range_column_aborts_whole_corpus(self, index):
        index.add_variant("gato", "cat")
        corpus = b"casa\thouse\nlivro\tbook\n"
        with pytest.raises(MalformedRecord):
            index.ingest(corpus, {"por": 0, "eng": 2})

        assert index.size() == 1
        assert not index.exists("casa")

    def test_short_record_midway_leaves_index_untouched(self, index):
        corpus = b"1\tcasa\thouse\n2\tlivro\n3\tgato\tcat\n"
        with pytest.raises(MalformedRecord) as excinfo:
            index.ingest(corpus, {"por": 1, "eng": 2})
        assert excinfo.value.line_number == 2
        assert index.size() == 0

    def test_missing_language_in_mapping(self, index):
        with pytest.raises(MalformedRecord):
            index.ingest(b"casa\thouse\n", {"por": 0})

    def test_merge_order_is_commutative(self):
        a = make_corpus([("casa", "house"), ("casa", "home"), ("livro", "book")])
        b = make_corpus([("casa", "home"), ("casa", "home"), ("gato", "cat")])

        ab = DictionaryIndex.for_pair(PAIR)
        ab.ingest(a, MAPPING)
        ab.ingest(b, MAPPING)

        ba = DictionaryIndex.for_pair(PAIR)
        ba.ingest(b, MAPPING)
        ba.ingest(a, MAPPING)

        assert list(ab.export_lines()) == list(ba.export_lines())
        assert ab.lookup("casa") == [("home", 3), ("house", 1)]

    def test_space_and_tab_corpora_ingest_identically(self, por_eng_rows):
        tabbed = DictionaryIndex.for_pair(PAIR)
        tabbed.ingest(make_corpus(por_eng_rows, "\t"), MAPPING)
        spaced = DictionaryIndex.for_pair(PAIR)
        spaced.ingest(make_corpus(por_eng_rows, " "), MAPPING)
        assert list(tabbed.export_lines()) == list(spaced.export_lines())


class TestExport:
    def test_export_lines(self, index):
        index.ingest(make_corpus([("hola", "hello"), ("hola", "hello"), ("hola", "hi"), ("casa", "house")]), MAPPING)
        assert list(index.export_lines()) == [
            "casa\thouse\t1",
            "hola\thello\t2\thi\t1",
        ]

    def test_export_and_load(self, index, temp_dir):
        index.ingest(make_corpus([("hola", "hello"), ("hola", "hello"), ("hola", "hi")]), MAPPING)
        path = index.export(temp_dir / "out" / "por_eng.tsv")

        assert path.read_text(encoding="utf-8") == "hola\thello\t2\thi\t1\n"

        loaded = DictionaryIndex.load(path, PAIR)
        assert loaded.lookup("hola") == index.lookup("hola")
        assert loaded.size() == 1

    def test_space_separated_corpus_with_tabs_round_trips(self, index, temp_dir):
        index.ingest(b"livro book\ncasa big\thouse x\n", MAPPING)
        path = index.export(temp_dir / "por_eng.tsv")

        loaded = DictionaryIndex.load(path, PAIR)
        assert loaded.words() == ["casa", "livro"]
        assert loaded.lookup("casa") == [("big house", 1)]
        assert loaded.lookup("livro") == [("book", 1)]

    def test_load_rejects_unpaired_fields(self, temp_dir):
        path = temp_dir / "bad.tsv"
        path.write_text("hola\thello\n", encoding="utf-8")
        with pytest.raises(MalformedRecord):
            DictionaryIndex.load(path, PAIR)

    def test_to_json(self, index):
        index.add_variant("hola", "hi")
        index.add_variant("hola", "hello")
        index.add_variant("hola", "hello")
        assert index.to_json() == b'{"hola":{"hello":2,"hi":1}}'

    def test_repr(self, index):
        index.add_variant("hola", "hello")
        assert repr(index) == "DictionaryIndex(por_eng: 1 words)"
