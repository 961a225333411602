"""Facet classification and aggregation.

Three independent families are derived from each document once, at
construction:

- category: grouped by the verbatim category string
- duration: "H:MM" converted to minutes and bucketed (< 3h, 3-6h, > 6h)
- level: literal keywords in the lowercased title

Each (dimension, facet id) pair owns one posting set, so filtering is plain
set membership resolved through ``FacetDimension``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging
import re

from course_search.domain.errors import MalformedDurationError
from course_search.domain.model import Document
from course_search.domain.search import (
    DifficultyLevel,
    DurationBucket,
    FacetDimension,
    FacetOption,
    Filters,
)


logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w]", re.ASCII)
_DURATION_PATTERN = re.compile(r"^\s*(\d+):(\d{1,2})\s*$")


@dataclass(frozen=True, slots=True)
class DurationRange:
    """Half-open minute range [min_minutes, max_minutes) for a bucket."""

    bucket: DurationBucket
    label: str
    min_minutes: int
    max_minutes: float

    def contains(self, minutes: int) -> bool:
        return self.min_minutes <= minutes < self.max_minutes


DURATION_RANGES: tuple[DurationRange, ...] = (
    DurationRange(DurationBucket.SHORT, "Corta (< 3h)", 0, 180),
    DurationRange(DurationBucket.MEDIUM, "Media (3-6h)", 180, 360),
    DurationRange(DurationBucket.LONG, "Larga (> 6h)", 360, float("inf")),
)

LEVEL_LABELS: dict[DifficultyLevel, str] = {
    DifficultyLevel.BEGINNER: "Principiante",
    DifficultyLevel.INTERMEDIATE: "Intermedio",
    DifficultyLevel.ADVANCED: "Avanzado",
}

# Literal substrings, not morphology: "avanzada" does not match "avanzado".
BEGINNER_KEYWORDS: tuple[str, ...] = ("básico", "introducción")
ADVANCED_KEYWORDS: tuple[str, ...] = ("avanzado", "superior")


def facet_id_for(label: str) -> str:
    """Lowercase ``label`` and replace every non-word character with ``_``."""
    return _NON_WORD.sub("_", label.lower())


def duration_to_minutes(duration: str) -> int:
    """Convert an "H:MM" duration string to total minutes.

    Raises:
        MalformedDurationError: If the string is not two numeric parts
            separated by a colon.
    """
    match = _DURATION_PATTERN.match(duration)
    if match is None:
        raise MalformedDurationError(duration)
    hours, minutes = match.groups()
    return int(hours) * 60 + int(minutes)


def classify_duration(minutes: int) -> DurationBucket:
    for duration_range in DURATION_RANGES:
        if duration_range.contains(minutes):
            return duration_range.bucket
    # Negative minutes cannot be produced by duration_to_minutes
    return DurationBucket.SHORT


def classify_level(title: str) -> DifficultyLevel:
    lowered = title.lower()
    if any(keyword in lowered for keyword in BEGINNER_KEYWORDS):
        return DifficultyLevel.BEGINNER
    if any(keyword in lowered for keyword in ADVANCED_KEYWORDS):
        return DifficultyLevel.ADVANCED
    return DifficultyLevel.INTERMEDIATE


class FacetIndex:
    """Per-dimension posting sets plus labeled, counted facet options."""

    def __init__(self, documents: Sequence[Document], *, strict_durations: bool = True) -> None:
        self.strict_durations = strict_durations
        self._postings: dict[FacetDimension, dict[str, set[str]]] = {dimension: {} for dimension in FacetDimension}
        self._category_labels: dict[str, str] = {}
        self.skipped_durations: list[str] = []

        for duration_range in DURATION_RANGES:
            self._postings[FacetDimension.DURATION][duration_range.bucket.value] = set()
        for level in DifficultyLevel:
            self._postings[FacetDimension.LEVEL][level.value] = set()

        for document in documents:
            self._index_document(document)

        self._options = {
            FacetDimension.CATEGORY: self._build_category_options(),
            FacetDimension.DURATION: [
                FacetOption(
                    id=duration_range.bucket.value,
                    label=duration_range.label,
                    count=len(self._postings[FacetDimension.DURATION][duration_range.bucket.value]),
                )
                for duration_range in DURATION_RANGES
            ],
            FacetDimension.LEVEL: [
                FacetOption(
                    id=level.value,
                    label=LEVEL_LABELS[level],
                    count=len(self._postings[FacetDimension.LEVEL][level.value]),
                )
                for level in DifficultyLevel
            ],
        }

    def _index_document(self, document: Document) -> None:
        category_id = facet_id_for(document.category)
        self._category_labels.setdefault(category_id, document.category)
        self._postings[FacetDimension.CATEGORY].setdefault(category_id, set()).add(document.id)

        try:
            bucket = classify_duration(duration_to_minutes(document.duration))
        except MalformedDurationError as exc:
            if self.strict_durations:
                raise MalformedDurationError(document.duration, doc_id=document.id) from exc
            logger.warning(
                "Excluding document %s from duration facets: malformed duration %r",
                document.id,
                document.duration,
            )
            self.skipped_durations.append(document.id)
        else:
            self._postings[FacetDimension.DURATION][bucket.value].add(document.id)

        level = classify_level(document.title)
        self._postings[FacetDimension.LEVEL][level.value].add(document.id)

    def _build_category_options(self) -> list[FacetOption]:
        return [
            FacetOption(id=category_id, label=label, count=len(self._postings[FacetDimension.CATEGORY][category_id]))
            for category_id, label in self._category_labels.items()
        ]

    def options(self, dimension: FacetDimension) -> list[FacetOption]:
        return list(self._options[dimension])

    def categories(self) -> list[FacetOption]:
        return self.options(FacetDimension.CATEGORY)

    def durations(self) -> list[FacetOption]:
        return self.options(FacetDimension.DURATION)

    def levels(self) -> list[FacetOption]:
        return self.options(FacetDimension.LEVEL)

    def members(self, dimension: FacetDimension, facet_id: str) -> frozenset[str]:
        """Document ids classified under ``facet_id``; empty for unknown ids."""
        return frozenset(self._postings[dimension].get(facet_id, ()))

    def matches(self, doc_id: str, filters: Filters) -> bool:
        """OR within a dimension, AND across active dimensions."""
        for dimension in FacetDimension:
            selected = filters.for_dimension(dimension)
            if not selected:
                continue
            postings = self._postings[dimension]
            if not any(doc_id in postings.get(facet_id, ()) for facet_id in selected):
                return False
        return True

    def filter_ids(self, doc_ids: Iterable[str], filters: Filters) -> set[str]:
        return {doc_id for doc_id in doc_ids if self.matches(doc_id, filters)}
