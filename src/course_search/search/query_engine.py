"""Free-text search with typo tolerance and facet filtering."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging

from course_search.domain.model import Document
from course_search.domain.search import Filters
from course_search.search.analyzers import collation_key, tokenize
from course_search.search.facets import FacetIndex
from course_search.search.inverted_index import InvertedIndex
from course_search.search.query_cache import QueryCache


logger = logging.getLogger(__name__)

DEFAULT_FUZZY_CANDIDATE_THRESHOLD = 10


class QueryEngine:
    """Combines exact and fuzzy token matching, facet filters and ranking.

    Results are ordered by title (locale-aware collation) and memoized per
    canonical ``(query, filters)``; the cache never changes what a query
    returns.
    """

    def __init__(
        self,
        documents: Sequence[Document],
        inverted_index: InvertedIndex,
        facet_index: FacetIndex,
        *,
        cache: QueryCache[tuple[Document, ...]] | None = None,
        fuzzy_candidate_threshold: int = DEFAULT_FUZZY_CANDIDATE_THRESHOLD,
        tokenizer: Callable[[str], list[str]] = tokenize,
    ) -> None:
        self._documents = tuple(documents)
        self._by_id = {document.id: document for document in self._documents}
        self._positions = {document.id: position for position, document in enumerate(self._documents)}
        self._index = inverted_index
        self._facets = facet_index
        self.cache: QueryCache[tuple[Document, ...]] = cache if cache is not None else QueryCache()
        self.fuzzy_candidate_threshold = fuzzy_candidate_threshold
        self._tokenize = tokenizer

    def search(self, query: str, filters: Filters | None = None) -> list[Document]:
        """Search the corpus.

        Args:
            query: Raw user query; empty means "no text constraint".
            filters: Selected facet ids; None or empty means no filtering.

        Returns:
            Matching documents sorted by title. With no query and no active
            filter, the whole corpus in its original order.
        """
        filters = filters or Filters()
        key = (query, filters.cache_key())
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)

        if not query and not filters.has_active():
            results = self._documents
        else:
            candidate_ids = self._candidates(query)
            if filters.has_active():
                candidate_ids = self._facets.filter_ids(candidate_ids, filters)
            results = self._rank(candidate_ids)

        self.cache.put(key, results)
        logger.debug("Query %r with %s matched %d documents", query, filters.cache_key(), len(results))
        return list(results)

    def _candidates(self, query: str) -> set[str]:
        if not query:
            return set(self._by_id)

        query_tokens = self._tokenize(query)
        candidate_ids = self._index.match_all(query_tokens)
        if len(candidate_ids) < self.fuzzy_candidate_threshold:
            candidate_ids |= self._index.fuzzy_postings(query_tokens)
        return candidate_ids

    def _rank(self, doc_ids: set[str]) -> tuple[Document, ...]:
        documents = (self._by_id[doc_id] for doc_id in doc_ids)
        # Corpus position breaks ties between identical titles
        return tuple(
            sorted(documents, key=lambda document: (collation_key(document.title), self._positions[document.id]))
        )
