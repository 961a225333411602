"""Analyzer utilities for Spanish course catalog search.

The analyzers follow a composable char-filter/tokenizer/filter design:
raw text is normalized (accents and case folded), stripped of punctuation,
split on whitespace, filtered by length and stemmed with a small
Spanish-oriented suffix stripper.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol
import unicodedata


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int

    def copy_with(self, text: str) -> Token:
        return Token(text=text, position=self.position)


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


CharFilter = Callable[[str], str]

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_WORD_OR_SPACE = re.compile(r"[^0-9A-Za-z_\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Strip diacritics and fold case so "Programación" compares as "programacion"."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = _COMBINING_MARKS.sub("", decomposed)
    return stripped.replace("ñ", "n").replace("ü", "u").lower()


def strip_punctuation(text: str) -> str:
    """Remove every character that is neither a word character nor whitespace."""
    return _NON_WORD_OR_SPACE.sub("", text)


class WhitespaceTokenizer:
    """Splits text on whitespace runs."""

    def __call__(self, text: str) -> Iterator[Token]:
        for position, piece in enumerate(_WHITESPACE.split(text)):
            yield Token(text=piece, position=position)


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = 2) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


# Order matters: the first suffix that fits wins.
SPANISH_SUFFIXES: tuple[str, ...] = (
    "ciones",
    "cion",
    "mente",
    "idades",
    "idad",
    "icamente",
    "ista",
    "istas",
    "izar",
    "izado",
    "izacion",
    "ante",
    "antes",
    "able",
    "ibles",
    "ador",
    "adores",
    "adora",
    "adoras",
    "ando",
    "iendo",
    "ado",
    "ido",
    "aba",
    "ia",
    "ar",
    "er",
    "ir",
)


def stem_word(word: str) -> str:
    """Basic Spanish stemming.

    Removes at most one derivational suffix (first match in
    ``SPANISH_SUFFIXES`` that leaves more than two characters), then strips a
    plural ending. Not idempotent: stemming the output again may shorten it
    further.

    Examples:
        >>> stem_word("programacion")
        'programa'
        >>> stem_word("bases")
        'bas'
    """
    for suffix in SPANISH_SUFFIXES:
        if word.endswith(suffix) and len(word) > len(suffix) + 2:
            word = word[: -len(suffix)]
            break

    if word.endswith("es") and len(word) > 4:
        word = word[:-2]
    elif word.endswith("s") and len(word) > 3:
        word = word[:-1]

    return word


class SpanishStemFilter:
    """Applies ``stem_word`` to every token."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            yield token.copy_with(text=stem_word(token.text))


class AnalyzerPipeline:
    """Composable analyzer pipeline (char filters + tokenizer + filters)."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        filters: Sequence[TokenFilter] | None = None,
        *,
        char_filters: Sequence[CharFilter] | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])
        self.char_filters = list(char_filters or [])

    def __call__(self, text: str) -> list[Token]:
        for char_filter in self.char_filters:
            text = char_filter(text)
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class SpanishAnalyzer:
    """Default analyzer for catalog fields and queries."""

    def __init__(self, *, min_length: int = 2, apply_stemming: bool = True) -> None:
        filters: list[TokenFilter] = [MinLengthFilter(min_length)]
        if apply_stemming:
            filters.append(SpanishStemFilter())
        self.pipeline = AnalyzerPipeline(
            WhitespaceTokenizer(),
            filters,
            char_filters=[normalize_text, strip_punctuation],
        )

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


_DEFAULT_ANALYZER = SpanishAnalyzer()


def tokenize(text: str) -> list[str]:
    """Tokenize text into normalized, stemmed search terms (order preserved)."""
    return [token.text for token in _DEFAULT_ANALYZER(text)]


def collation_key(text: str) -> tuple[str, str, str]:
    """Sort key approximating locale-aware comparison of titles.

    Accents and case are ignored at the primary level; accented variants
    come next, and titles differing only in case put lowercase first.
    """
    return (normalize_text(text), unicodedata.normalize("NFC", text).casefold(), text.swapcase())
