"""Unit tests for the course-search command line."""

import logging

import orjson
import pytest

from course_search.cli import build_argument_parser, main


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def corpus_file(tmp_path, scenario_documents):
    path = tmp_path / "courses.json"
    path.write_bytes(orjson.dumps([document.to_dict() for document in scenario_documents]))
    return path


def _run(capsys, argv):
    exit_code = main(argv)
    return exit_code, orjson.loads(capsys.readouterr().out)


class TestArgumentParser:
    def test_search_defaults(self):
        args = build_argument_parser().parse_args(["search"])
        assert args.query == ""
        assert args.category == []
        assert args.corpus is None
        assert args.sample_size == 100

    def test_repeated_filters(self):
        args = build_argument_parser().parse_args(["search", "--duration", "short", "--duration", "long"])
        assert args.duration == ["short", "long"]

    def test_rejects_unknown_level(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args(["search", "--level", "expert"])

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args([])


class TestMain:
    def test_search_corpus_file(self, capsys, corpus_file):
        exit_code, results = _run(capsys, ["--corpus", str(corpus_file), "search", "programacion"])

        assert exit_code == 0
        assert [result["id"] for result in results] == ["D1"]
        assert "viewCount" in results[0]

    def test_search_with_filters(self, capsys, corpus_file):
        exit_code, results = _run(
            capsys,
            ["--corpus", str(corpus_file), "search", "--level", "beginner", "--category", "ofim_tica"],
        )
        assert exit_code == 0
        assert [result["id"] for result in results] == ["D3"]

    def test_suggest(self, capsys, corpus_file):
        exit_code, suggestions = _run(capsys, ["--corpus", str(corpus_file), "suggest", "ana", "--limit", "1"])

        assert exit_code == 0
        assert [suggestion["category"] for suggestion in suggestions] == ["title", "instructor", "category"]
        assert suggestions[1]["reason"]["highlighted_value"] == "<b>Ana</b> López"

    def test_facets_on_sample_catalog(self, capsys):
        exit_code, facets = _run(capsys, ["--sample-size", "10", "facets"])

        assert exit_code == 0
        assert set(facets) == {"categories", "durations", "levels"}
        assert sum(option["count"] for option in facets["durations"]) == 10
        assert len(facets["categories"]) == 10

    def test_sample_catalog_search(self, capsys):
        exit_code, results = _run(capsys, ["--sample-size", "20", "search", "guardia"])

        assert exit_code == 0
        assert "Test Guardia Civil 2024 (Edición 1)" in [result["title"] for result in results]

    def test_missing_corpus_file(self, capsys, tmp_path):
        assert main(["--corpus", str(tmp_path / "missing.json"), "facets"]) == 1
        assert capsys.readouterr().out == ""

    def test_duplicate_ids_in_corpus(self, tmp_path, d1):
        path = tmp_path / "courses.json"
        path.write_bytes(orjson.dumps([d1.to_dict(), d1.to_dict()]))

        assert main(["--corpus", str(path), "facets"]) == 1
