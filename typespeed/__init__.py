"""Terminal typing-speed test."""

from typespeed.corpus import Corpus, TypespeedError, UnknownLanguage

__version__ = "0.1.0"

__all__ = ["Corpus", "TypespeedError", "UnknownLanguage", "__version__"]
