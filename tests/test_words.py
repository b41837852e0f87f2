"""Tests for typespeed.words – target word generation."""

from __future__ import annotations

import random
import re

import pytest

from conftest import ScriptedRandom
from typespeed.corpus import Corpus, UnknownLanguage
from typespeed.words import apply_punctuation, generate_words

TEN = Corpus(name="ten", words=tuple(f"w{i}" for i in range(10)))


# ---------------------------------------------------------------------------
# generate_words
# ---------------------------------------------------------------------------

class TestGenerateWords:
    @pytest.mark.parametrize("count", [0, 1, 25, 100])
    def test_exact_count(self, count):
        assert len(generate_words(TEN, count, rng=random.Random(1))) == count

    def test_power_law_index(self):
        # floor(0.5 ** 1.5 * 10) == 3
        assert generate_words(TEN, 1, rng=ScriptedRandom([0.5])) == ["w3"]

    def test_low_draws_pick_head_of_list(self):
        assert generate_words(TEN, 3, rng=ScriptedRandom([0.0])) == ["w0", "w0", "w0"]

    def test_number_replaces_word(self):
        # index draw, number chance, digit count (4), value
        rng = ScriptedRandom([0.0, 0.05, 0.75, 0.5])
        assert generate_words(TEN, 1, numbers=True, rng=rng) == ["5000"]

    def test_number_chance_missed(self):
        rng = ScriptedRandom([0.0, 0.5])
        assert generate_words(TEN, 1, numbers=True, rng=rng) == ["w0"]

    def test_no_numbers_without_flag(self):
        words = generate_words("english", 100, numbers=False, rng=random.Random(7))
        assert not any(re.fullmatch(r"\d+", w) for w in words)

    def test_numbers_appear_with_flag(self):
        words = generate_words("english", 500, numbers=True, rng=random.Random(7))
        assert any(re.fullmatch(r"\d{1,4}", w) for w in words)

    def test_corpus_by_name(self):
        words = generate_words("english", 5, rng=random.Random(3))
        assert len(words) == 5

    def test_unknown_language(self):
        with pytest.raises(UnknownLanguage):
            generate_words("klingon", 5)

    def test_punctuation_keeps_count(self):
        words = generate_words(TEN, 50, punctuation=True, rng=random.Random(11))
        assert len(words) == 50
        assert words[0][0].isupper()


# ---------------------------------------------------------------------------
# apply_punctuation
# ---------------------------------------------------------------------------

class TestApplyPunctuation:
    def test_periods_commas_and_capitals(self):
        # word 0: comma draw; word 1: period draw; word 2: period draw, comma draw
        rng = ScriptedRandom([0.9, 0.05, 0.9, 0.01])
        assert apply_punctuation(["a", "b", "c"], rng) == ["A", "b.", "C,"]

    def test_no_period_on_first_word(self):
        rng = ScriptedRandom([0.0])
        # first word only gets a comma draw, which 0.0 passes
        assert apply_punctuation(["a"], rng) == ["A,"]

    def test_empty_words_not_capitalized(self):
        rng = ScriptedRandom([0.99])
        assert apply_punctuation(["", "b"], rng) == ["", "B"]

    def test_does_not_modify_input(self):
        words = ["a", "b"]
        apply_punctuation(words, ScriptedRandom([0.0]))
        assert words == ["a", "b"]
