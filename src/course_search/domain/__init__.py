"""Domain layer - pure catalog and search concepts with no infrastructure.

This layer contains:
- Entities: objects with identity (Document)
- Value objects: immutable objects defined by their attributes (Filters,
  FacetOption, Suggestion)
- The error taxonomy raised where invalid data enters the engine
"""

from course_search.domain.errors import (
    CorpusLoadError,
    CourseSearchError,
    DuplicateDocumentIdError,
    MalformedDurationError,
)
from course_search.domain.model import Document
from course_search.domain.search import (
    DifficultyLevel,
    DurationBucket,
    FacetDimension,
    FacetOption,
    Filters,
    Suggestion,
    SuggestionCategory,
    SuggestionReason,
    SuggestionReasonLabel,
)


__all__ = [
    "CorpusLoadError",
    "CourseSearchError",
    "DifficultyLevel",
    "Document",
    "DuplicateDocumentIdError",
    "DurationBucket",
    "FacetDimension",
    "FacetOption",
    "Filters",
    "MalformedDurationError",
    "Suggestion",
    "SuggestionCategory",
    "SuggestionReason",
    "SuggestionReasonLabel",
]
