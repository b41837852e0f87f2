from __future__ import annotations

import math
import random
from typing import List, Union

from typespeed.corpus import Corpus, resolve

NUMBER_CHANCE = 0.08
PERIOD_CHANCE = 0.12
COMMA_CHANCE = 0.06


def generate_words(
    corpus: Union[Corpus, str],
    count: int,
    punctuation: bool = False,
    numbers: bool = False,
    rng=None,
) -> List[str]:
    """Draw ``count`` target words from a corpus.

    Indices follow ``floor(r ** 1.5 * n)`` so the head of a frequency-ordered
    list comes up more often. ``rng`` only needs a ``random()`` method.
    """
    if isinstance(corpus, str):
        corpus = resolve(corpus)
    rng = rng or random
    pool = corpus.words

    words: List[str] = []
    for _ in range(count):
        index = math.floor(rng.random() ** 1.5 * len(pool))
        word = pool[min(index, len(pool) - 1)]

        if numbers and rng.random() < NUMBER_CHANCE:
            digits = math.floor(rng.random() * 4) + 1
            word = str(math.floor(rng.random() * 10 ** digits))

        words.append(word)

    if punctuation:
        return apply_punctuation(words, rng)
    return words


def apply_punctuation(words: List[str], rng=None) -> List[str]:
    rng = rng or random
    out = list(words)
    sentence_start = True

    for i, word in enumerate(out):
        if sentence_start and word:
            word = word[0].upper() + word[1:]
            sentence_start = False

        if i > 0 and rng.random() < PERIOD_CHANCE:
            word += "."
            sentence_start = True
        elif not sentence_start and rng.random() < COMMA_CHANCE:
            word += ","

        out[i] = word

    return out
