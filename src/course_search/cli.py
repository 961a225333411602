"""Command-line access to the course search engine.

Examples:
    course-search search "derecho penal" --level intermediate
    course-search --corpus courses.json suggest "guar"
    course-search facets
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from course_search.config import Settings
from course_search.corpus import build_sample_catalog, load_documents
from course_search.domain.errors import CourseSearchError
from course_search.domain.search import Filters
from course_search.engine import CourseSearchEngine
from course_search.observability.logging import configure_logging


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-search",
        description="Search, filter and get suggestions from a course catalog",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        help="JSON array of course records (defaults to the generated sample catalog)",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=100,
        help="Number of sample courses to generate when --corpus is not given (default: 100)",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    search = subcommands.add_parser("search", help="Free-text search with facet filters")
    search.add_argument("query", nargs="?", default="", help="Search text (empty lists the catalog)")
    search.add_argument("--category", action="append", default=[], metavar="ID", help="Category facet id")
    search.add_argument(
        "--duration",
        action="append",
        default=[],
        choices=["short", "medium", "long"],
        help="Duration bucket",
    )
    search.add_argument(
        "--level",
        action="append",
        default=[],
        choices=["beginner", "intermediate", "advanced"],
        help="Difficulty level",
    )

    suggest = subcommands.add_parser("suggest", help="Typeahead suggestions for a partial query")
    suggest.add_argument("query", help="Partial query text")
    suggest.add_argument("--limit", type=int, help="Suggestions per field")

    subcommands.add_parser("facets", help="List facet options with counts")
    return parser


def _run(engine: CourseSearchEngine, args: argparse.Namespace) -> Any:
    if args.command == "search":
        filters = Filters(
            categories=frozenset(args.category),
            durations=frozenset(args.duration),
            levels=frozenset(args.level),
        )
        return [document.to_dict() for document in engine.search(args.query, filters)]
    if args.command == "suggest":
        return [suggestion.model_dump(mode="json") for suggestion in engine.suggest(args.query, args.limit)]
    return {
        "categories": [option.model_dump() for option in engine.categories()],
        "durations": [option.model_dump() for option in engine.durations()],
        "levels": [option.model_dump() for option in engine.levels()],
    }


def main(argv: Sequence[str] | None = None) -> int:
    settings = Settings()
    configure_logging(settings.log_level, settings.log_json)
    args = build_argument_parser().parse_args(argv)

    try:
        documents = load_documents(args.corpus) if args.corpus else build_sample_catalog(args.sample_size)
        engine = CourseSearchEngine(documents, settings=settings)
    except CourseSearchError as exc:
        logger.error("Cannot build course index: %s", exc)
        return 1

    output = _run(engine, args)
    sys.stdout.write(orjson.dumps(output, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
