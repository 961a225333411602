"""course-search - in-memory full-text search and facet filtering for course catalogs."""

from course_search.config import Settings
from course_search.corpus import build_sample_catalog, load_documents
from course_search.domain import (
    CorpusLoadError,
    CourseSearchError,
    Document,
    DuplicateDocumentIdError,
    FacetDimension,
    FacetOption,
    Filters,
    MalformedDurationError,
    Suggestion,
)
from course_search.engine import CourseSearchEngine
from course_search.service_layer import SearchSession


__version__ = "0.1.0"

__all__ = [
    "CorpusLoadError",
    "CourseSearchEngine",
    "CourseSearchError",
    "Document",
    "DuplicateDocumentIdError",
    "FacetDimension",
    "FacetOption",
    "Filters",
    "MalformedDurationError",
    "SearchSession",
    "Settings",
    "Suggestion",
    "__version__",
    "build_sample_catalog",
    "load_documents",
]
