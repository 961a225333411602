"""Error taxonomy for the course search domain.

Errors are raised only where invalid data enters the system (engine
construction and corpus loading). Query paths never raise for degenerate
input: empty queries, unknown facet ids and absent tokens all degrade to
smaller or empty result sets.
"""

from __future__ import annotations


class CourseSearchError(ValueError):
    """Base error for the course search domain."""


class DuplicateDocumentIdError(CourseSearchError):
    """Raised when two documents in one corpus share an id."""

    def __init__(self, doc_id: str) -> None:
        self.doc_id = doc_id
        super().__init__(f"Duplicate document id '{doc_id}' in corpus")


class MalformedDurationError(CourseSearchError):
    """Raised when a duration string cannot be parsed as H:MM."""

    def __init__(self, duration: str, doc_id: str | None = None) -> None:
        self.duration = duration
        self.doc_id = doc_id
        where = f" for document '{doc_id}'" if doc_id else ""
        super().__init__(f"Malformed duration {duration!r}{where}; expected H:MM")


class CorpusLoadError(CourseSearchError):
    """Raised when a corpus file cannot be converted into documents."""
