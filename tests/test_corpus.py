"""Tests for typespeed.corpus – bundled word lists."""

from __future__ import annotations

import pytest

from typespeed.corpus import Corpus, TypespeedError, UnknownLanguage, list_available, resolve


class TestListAvailable:
    def test_sorted_and_bundled(self):
        names = list_available()
        assert names == sorted(names)
        assert "english" in names
        assert "code_python" in names


class TestResolve:
    def test_english(self):
        corpus = resolve("english")
        assert isinstance(corpus, Corpus)
        assert corpus.name == "english"
        assert corpus.ordered_by_frequency
        assert not corpus.no_lazy_mode
        assert corpus.words[0] == "the"

    def test_flags(self):
        assert resolve("code_python").no_lazy_mode

    def test_words_are_immutable(self):
        assert isinstance(resolve("english").words, tuple)

    def test_cached(self):
        assert resolve("english") is resolve("english")

    @pytest.mark.parametrize("name", ["klingon", "", "../english"])
    def test_unknown(self, name):
        with pytest.raises(UnknownLanguage) as exc:
            resolve(name)
        assert exc.value.name == name
        assert isinstance(exc.value, TypespeedError)
