"""Course search engine - one deep module over an immutable corpus.

Hides analyzers, the inverted and facet indexes, the query cache and the
suggestion engine behind ``search``, ``suggest`` and the facet accessors.
One engine instance owns one corpus snapshot; a changed corpus needs a new
engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
import logging
from typing import Any

from course_search.config import Settings
from course_search.domain.errors import DuplicateDocumentIdError
from course_search.domain.model import Document
from course_search.domain.search import FacetOption, Filters, Suggestion
from course_search.observability.metrics import (
    INDEX_BUILD_LATENCY,
    INDEX_DOC_COUNT,
    QUERY_CACHE_EVENTS,
    QUERY_LATENCY,
    track_latency,
)
from course_search.observability.context import bind_catalog
from course_search.observability.tracing import create_span
from course_search.search.facets import FacetIndex
from course_search.search.inverted_index import InvertedIndex
from course_search.search.query_cache import QueryCache
from course_search.search.query_engine import QueryEngine
from course_search.search.suggestions import SuggestionEngine


logger = logging.getLogger(__name__)


def ensure_unique_ids(documents: Iterable[Document]) -> None:
    """Raise DuplicateDocumentIdError on the first repeated id."""
    seen: set[str] = set()
    for document in documents:
        if document.id in seen:
            raise DuplicateDocumentIdError(document.id)
        seen.add(document.id)


class CourseSearchEngine:
    """Full-text search, facet filtering and typeahead over a course catalog."""

    def __init__(self, documents: Iterable[Document], settings: Settings | None = None) -> None:
        """Build every index eagerly.

        Args:
            documents: The corpus, in display order.
            settings: Engine configuration; defaults to environment settings.

        Raises:
            DuplicateDocumentIdError: If two documents share an id.
            MalformedDurationError: If a duration is not H:MM and
                ``settings.strict_durations`` is enabled.
        """
        self.settings = settings or Settings()
        self._documents = tuple(documents)
        catalog = self.settings.catalog_name

        with self._span("course_search.index.build", documents=len(self._documents)):
            with self._timed(INDEX_BUILD_LATENCY):
                ensure_unique_ids(self._documents)
                self._inverted_index = InvertedIndex(
                    self._documents,
                    max_fuzzy_distance=self.settings.max_fuzzy_distance,
                )
                self._facet_index = FacetIndex(self._documents, strict_durations=self.settings.strict_durations)

        cache: QueryCache[tuple[Document, ...]] = QueryCache(
            self.settings.query_cache_max_entries,
            on_event=self._record_cache_event if self.settings.metrics_enabled else None,
        )
        self._query_engine = QueryEngine(
            self._documents,
            self._inverted_index,
            self._facet_index,
            cache=cache,
            fuzzy_candidate_threshold=self.settings.fuzzy_candidate_threshold,
        )
        self._suggestion_engine = SuggestionEngine(
            self._documents,
            self._inverted_index,
            default_limit=self.settings.suggestion_limit,
            highlight_open=self.settings.highlight_open,
            highlight_close=self.settings.highlight_close,
        )

        if self.settings.metrics_enabled:
            INDEX_DOC_COUNT.labels(catalog=catalog).set(len(self._documents))
        with bind_catalog(catalog):
            logger.info(
                "Course index built for %s: %d documents, %d tokens, %d categories",
                catalog,
                len(self._documents),
                len(self._inverted_index),
                len(self._facet_index.categories()),
            )

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        settings: Settings | None = None,
    ) -> CourseSearchEngine:
        """Build an engine from raw course mappings (camelCase or snake_case keys)."""
        return cls((Document.from_record(record) for record in records), settings=settings)

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    @property
    def query_cache(self) -> QueryCache[tuple[Document, ...]]:
        return self._query_engine.cache

    def __len__(self) -> int:
        return len(self._documents)

    def search(self, query: str, filters: Filters | None = None) -> list[Document]:
        """Search by free text and facet filters; see ``QueryEngine.search``."""
        with self._span("course_search.search", query_length=len(query)):
            with self._timed(QUERY_LATENCY, operation="search"):
                return self._query_engine.search(query, filters)

    def suggest(self, query: str, limit: int | None = None) -> list[Suggestion]:
        """Typeahead suggestions; ``limit`` defaults to ``settings.suggestion_limit``."""
        with self._span("course_search.suggest", query_length=len(query)):
            with self._timed(QUERY_LATENCY, operation="suggest"):
                return self._suggestion_engine.suggest(query, limit)

    def categories(self) -> list[FacetOption]:
        return self._facet_index.categories()

    def durations(self) -> list[FacetOption]:
        return self._facet_index.durations()

    def levels(self) -> list[FacetOption]:
        return self._facet_index.levels()

    @contextmanager
    def _span(self, name: str, **attributes: Any) -> Iterator[None]:
        # Logs emitted inside carry this engine's catalog even without tracing
        with bind_catalog(self.settings.catalog_name):
            if not self.settings.tracing_enabled:
                yield
                return
            with create_span(name, attributes={"catalog": self.settings.catalog_name, **attributes}):
                yield

    @contextmanager
    def _timed(self, histogram, **labels: str) -> Iterator[None]:
        if not self.settings.metrics_enabled:
            yield
            return
        with track_latency(histogram, catalog=self.settings.catalog_name, **labels):
            yield

    def _record_cache_event(self, event: str) -> None:
        QUERY_CACHE_EVENTS.labels(catalog=self.settings.catalog_name, event=event).inc()
