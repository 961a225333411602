"""Typeahead suggestions over title, instructor and category fields.

Matching runs on analyzed tokens (prefix of the first query token, with a
fuzzy fallback over the whole query). The explanation shown to the user is
computed separately, by highlighting the raw query text as a literal
case-insensitive substring. When stemming or accents make the two differ,
the explanation is returned without a highlight.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import re

from course_search.domain.model import Document
from course_search.domain.search import (
    Suggestion,
    SuggestionCategory,
    SuggestionReason,
    SuggestionReasonLabel,
)
from course_search.search.analyzers import tokenize
from course_search.search.inverted_index import InvertedIndex


logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 5
HIGHLIGHT_OPEN = "<b>"
HIGHLIGHT_CLOSE = "</b>"


def highlight_match(
    text: str,
    query: str,
    open_tag: str = HIGHLIGHT_OPEN,
    close_tag: str = HIGHLIGHT_CLOSE,
) -> str:
    """Wrap the first case-insensitive literal occurrence of ``query`` in ``text``.

    Returns ``text`` unchanged when the query does not occur verbatim.
    """
    if not text or not query:
        return text
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda match: f"{open_tag}{match.group(0)}{close_tag}", text, count=1)


@dataclass(frozen=True, slots=True)
class _AnalyzedDocument:
    document: Document
    title_tokens: tuple[str, ...]
    instructor_tokens: tuple[str, ...]
    category_tokens: tuple[str, ...]


def _has_prefix(tokens: Sequence[str], prefix: str) -> bool:
    return any(token.startswith(prefix) for token in tokens)


class SuggestionEngine:
    """Prefix and fuzzy typeahead with match explanations."""

    def __init__(
        self,
        documents: Sequence[Document],
        inverted_index: InvertedIndex,
        *,
        tokenizer: Callable[[str], list[str]] = tokenize,
        default_limit: int = DEFAULT_SUGGESTION_LIMIT,
        highlight_open: str = HIGHLIGHT_OPEN,
        highlight_close: str = HIGHLIGHT_CLOSE,
    ) -> None:
        self._index = inverted_index
        self._tokenize = tokenizer
        self.default_limit = default_limit
        self.highlight_open = highlight_open
        self.highlight_close = highlight_close
        self._analyzed = tuple(
            _AnalyzedDocument(
                document=document,
                title_tokens=tuple(tokenizer(document.title)),
                instructor_tokens=tuple(tokenizer(document.instructor)),
                category_tokens=tuple(tokenizer(document.category)),
            )
            for document in documents
        )

    def suggest(self, query: str, limit: int | None = None) -> list[Suggestion]:
        """Suggest titles, instructors and categories for a partial query.

        Output order is fixed: up to ``limit`` titles, then up to ``limit``
        instructors, then up to ``limit`` categories, so the list may hold
        up to three times ``limit`` entries.
        """
        if limit is None:
            limit = self.default_limit
        if not query or limit <= 0:
            return []

        query_tokens = self._tokenize(query)
        if not query_tokens:
            return []
        prefix = query_tokens[0]

        # Distinct values keyed by text, each remembering its first source document
        titles: dict[str, _AnalyzedDocument] = {}
        instructors: dict[str, _AnalyzedDocument] = {}
        categories: dict[str, _AnalyzedDocument] = {}

        for analyzed in self._analyzed:
            document = analyzed.document
            if _has_prefix(analyzed.title_tokens, prefix):
                titles.setdefault(document.title, analyzed)
            if _has_prefix(analyzed.instructor_tokens, prefix):
                instructors.setdefault(document.instructor, analyzed)
            if _has_prefix(analyzed.category_tokens, prefix):
                categories.setdefault(document.category, analyzed)

        if min(len(titles), len(instructors), len(categories)) < limit:
            fuzzy_ids = self._index.fuzzy_postings(query_tokens)
            for analyzed in self._analyzed:
                document = analyzed.document
                if document.id not in fuzzy_ids:
                    continue
                titles.setdefault(document.title, analyzed)
                instructors.setdefault(document.instructor, analyzed)
                categories.setdefault(document.category, analyzed)

        suggestions: list[Suggestion] = []
        for title, analyzed in list(titles.items())[:limit]:
            reason = None
            if _has_prefix(analyzed.instructor_tokens, prefix):
                reason = self._reason(SuggestionReasonLabel.INSTRUCTOR, analyzed.document.instructor, query)
            suggestions.append(
                Suggestion(
                    text=title,
                    category=SuggestionCategory.TITLE,
                    source_document=analyzed.document,
                    reason=reason,
                )
            )
        for instructor, analyzed in list(instructors.items())[:limit]:
            suggestions.append(
                Suggestion(
                    text=instructor,
                    category=SuggestionCategory.INSTRUCTOR,
                    source_document=analyzed.document,
                    reason=self._reason(SuggestionReasonLabel.INSTRUCTOR, instructor, query),
                )
            )
        for category, analyzed in list(categories.items())[:limit]:
            suggestions.append(
                Suggestion(
                    text=category,
                    category=SuggestionCategory.CATEGORY,
                    source_document=analyzed.document,
                    reason=self._reason(SuggestionReasonLabel.CATEGORY, category, query),
                )
            )

        logger.debug("Suggestions for %r: %d", query, len(suggestions))
        return suggestions

    def _reason(self, label: SuggestionReasonLabel, value: str, query: str) -> SuggestionReason:
        return SuggestionReason(
            label=label,
            value=value,
            highlighted_value=highlight_match(value, query, self.highlight_open, self.highlight_close),
        )
