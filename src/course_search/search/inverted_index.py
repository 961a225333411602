"""Inverted index over course title, category and instructor."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import logging

from course_search.domain.model import Document
from course_search.search.analyzers import tokenize
from course_search.search.fuzzy import DEFAULT_MAX_DISTANCE, find_fuzzy_matches


logger = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


def indexed_text(document: Document) -> str:
    """Text of a document that feeds the inverted index."""
    return f"{document.title} {document.category} {document.instructor}"


class InvertedIndex:
    """Maps each token to the set of document ids containing it.

    Built once from an immutable corpus and read-only afterwards. Every
    token present maps to a non-empty posting set.
    """

    def __init__(
        self,
        documents: Sequence[Document],
        *,
        tokenizer: Callable[[str], list[str]] = tokenize,
        max_fuzzy_distance: int = DEFAULT_MAX_DISTANCE,
    ) -> None:
        self.tokenizer = tokenizer
        self.max_fuzzy_distance = max_fuzzy_distance
        postings: dict[str, set[str]] = {}
        for document in documents:
            for token in tokenizer(indexed_text(document)):
                postings.setdefault(token, set()).add(document.id)
        self._postings: dict[str, frozenset[str]] = {token: frozenset(ids) for token, ids in postings.items()}
        self._document_count = len(documents)
        logger.debug("Indexed %d documents into %d tokens", self._document_count, len(self._postings))

    def __contains__(self, token: object) -> bool:
        return token in self._postings

    def __len__(self) -> int:
        return len(self._postings)

    @property
    def document_count(self) -> int:
        return self._document_count

    @property
    def vocabulary(self) -> tuple[str, ...]:
        """Distinct indexed tokens, in first-seen order."""
        return tuple(self._postings)

    def postings(self, token: str) -> frozenset[str]:
        """Document ids for ``token``; empty when the token is not indexed."""
        return self._postings.get(token, _EMPTY)

    def match_all(self, query_tokens: Sequence[str]) -> set[str]:
        """Exact matching of analyzed query tokens.

        The first token gates existence: its posting set is the starting
        candidate set (empty when unknown). Each later token narrows the set
        only when it is indexed; unknown later tokens are ignored.
        """
        if not query_tokens:
            return set()
        matching = set(self.postings(query_tokens[0]))
        for token in query_tokens[1:]:
            if token not in self._postings:
                continue
            matching &= self._postings[token]
        return matching

    def fuzzy_postings(self, query_tokens: Iterable[str]) -> set[str]:
        """Union of postings of all indexed tokens close to any query token."""
        matches: set[str] = set()
        for query_token in query_tokens:
            for term, _distance in find_fuzzy_matches(query_token, self._postings, cap=self.max_fuzzy_distance):
                matches.update(self._postings[term])
        return matches
