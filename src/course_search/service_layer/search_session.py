"""Search session - the state a catalog screen keeps between keystrokes.

Holds the current query and facet selection for one user and delegates to a
shared engine. Debouncing and loading indicators belong to the presentation
layer and are not modeled here.
"""

import logging

from course_search.config import Settings
from course_search.domain.model import Document
from course_search.domain.search import FacetDimension, FacetOption, Filters, Suggestion
from course_search.engine import CourseSearchEngine


logger = logging.getLogger(__name__)


class SearchSession:
    """Per-user query and filter state over a ``CourseSearchEngine``."""

    def __init__(self, engine: CourseSearchEngine, settings: Settings | None = None):
        self.engine = engine
        self.settings = settings or engine.settings
        self.query = ""
        self.filters = Filters()

    def set_query(self, query: str) -> None:
        self.query = query

    def set_filters(self, filters: Filters) -> None:
        self.filters = filters

    def toggle_filter(self, dimension: FacetDimension, facet_id: str) -> Filters:
        """Select or deselect one facet option and return the new filters."""
        self.filters = self.filters.toggled(dimension, facet_id)
        logger.debug("Filters for %s now %s", dimension.value, self.filters.for_dimension(dimension))
        return self.filters

    def clear_filters(self) -> None:
        self.filters = self.filters.cleared()

    def results(self) -> list[Document]:
        return self.engine.search(self.query, self.filters)

    def suggestions(self) -> list[Suggestion]:
        """Suggestions for the current query, once it is long enough."""
        if len(self.query) < self.settings.min_suggestion_query_length:
            return []
        return self.engine.suggest(self.query)

    def facet_options(self) -> dict[FacetDimension, list[FacetOption]]:
        return {
            FacetDimension.CATEGORY: self.engine.categories(),
            FacetDimension.DURATION: self.engine.durations(),
            FacetDimension.LEVEL: self.engine.levels(),
        }
