"""Domain models for search, facets and suggestions.

Value objects are immutable (frozen=True) so results handed to the
presentation layer cannot alter cached state.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from course_search.domain.model import Document


class FacetDimension(str, Enum):
    """Filterable classification dimensions."""

    CATEGORY = "category"
    DURATION = "duration"
    LEVEL = "level"


class DurationBucket(str, Enum):
    """Duration facet ids."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class DifficultyLevel(str, Enum):
    """Level facet ids, derived from course titles."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SuggestionCategory(str, Enum):
    """Field a suggestion was drawn from."""

    TITLE = "title"
    INSTRUCTOR = "instructor"
    CATEGORY = "category"


class SuggestionReasonLabel(str, Enum):
    """Labels shown next to a suggestion to explain why it matched."""

    INSTRUCTOR = "instructor"
    CATEGORY = "categoria"


class FacetOption(BaseModel):
    """A labeled, counted option of one facet family."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    count: int = Field(default=0, ge=0)


class Filters(BaseModel):
    """Selected facet ids per dimension.

    An empty set means "no constraint" on that dimension. Within one
    dimension a document matches any of the selected ids; across dimensions
    every active dimension must match.
    """

    model_config = ConfigDict(frozen=True)

    categories: frozenset[str] = Field(default_factory=frozenset)
    durations: frozenset[str] = Field(default_factory=frozenset)
    levels: frozenset[str] = Field(default_factory=frozenset)

    def has_active(self) -> bool:
        return bool(self.categories or self.durations or self.levels)

    def for_dimension(self, dimension: FacetDimension) -> frozenset[str]:
        return getattr(self, _DIMENSION_FIELDS[dimension])

    def toggled(self, dimension: FacetDimension, facet_id: str) -> Filters:
        """Return a copy with ``facet_id`` added to or removed from ``dimension``."""
        selected = self.for_dimension(dimension)
        updated = selected - {facet_id} if facet_id in selected else selected | {facet_id}
        return self.model_copy(update={_DIMENSION_FIELDS[dimension]: updated})

    def cleared(self) -> Filters:
        return Filters()

    def cache_key(self) -> tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]]:
        """Canonical, order-independent representation used for memoization."""
        return (
            tuple(sorted(self.categories)),
            tuple(sorted(self.durations)),
            tuple(sorted(self.levels)),
        )


_DIMENSION_FIELDS: dict[FacetDimension, str] = {
    FacetDimension.CATEGORY: "categories",
    FacetDimension.DURATION: "durations",
    FacetDimension.LEVEL: "levels",
}


class SuggestionReason(BaseModel):
    """Explains why a suggestion matched, with the query highlighted."""

    model_config = ConfigDict(frozen=True)

    label: SuggestionReasonLabel
    value: str
    highlighted_value: str


class Suggestion(BaseModel):
    """A typeahead proposal shown before the query is submitted."""

    model_config = ConfigDict(frozen=True)

    text: str
    category: SuggestionCategory
    source_document: Document | None = None
    reason: SuggestionReason | None = None
