"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Every engine setting pinned so a developer's .env or shell cannot leak in
TEST_ENV = {
    "COURSE_SEARCH_CATALOG_NAME": "test-catalog",
    "COURSE_SEARCH_FUZZY_CANDIDATE_THRESHOLD": "10",
    "COURSE_SEARCH_MAX_FUZZY_DISTANCE": "2",
    "COURSE_SEARCH_SUGGESTION_LIMIT": "5",
    "COURSE_SEARCH_MIN_SUGGESTION_QUERY_LENGTH": "2",
    "COURSE_SEARCH_STRICT_DURATIONS": "true",
    "COURSE_SEARCH_HIGHLIGHT_OPEN": "<b>",
    "COURSE_SEARCH_HIGHLIGHT_CLOSE": "</b>",
    "COURSE_SEARCH_LOG_LEVEL": "info",
    "COURSE_SEARCH_LOG_JSON": "true",
    "COURSE_SEARCH_METRICS_ENABLED": "true",
    "COURSE_SEARCH_TRACING_ENABLED": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("COURSE_SEARCH_QUERY_CACHE_MAX_ENTRIES", None)

from course_search.config import Settings
from course_search.corpus import build_sample_catalog
from course_search.domain.model import Document
from course_search.engine import CourseSearchEngine


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset engine environment variables before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("COURSE_SEARCH_QUERY_CACHE_MAX_ENTRIES", raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def d1() -> Document:
    return Document(
        id="D1",
        title="Programación Avanzada",
        category="Informática",
        instructor="Ana López",
        duration="5:00",
    )


@pytest.fixture
def d2() -> Document:
    return Document(
        id="D2",
        title="Introducción a Bases de Datos",
        category="Informática",
        instructor="Juan Pérez",
        duration="2:30",
    )


@pytest.fixture
def d3() -> Document:
    return Document(
        id="D3",
        title="Curso Básico de Excel",
        category="Ofimática",
        instructor="Ana López",
        duration="1:15",
    )


@pytest.fixture
def scenario_documents(d1, d2, d3) -> list[Document]:
    return [d1, d2, d3]


@pytest.fixture
def scenario_engine(scenario_documents, settings) -> CourseSearchEngine:
    return CourseSearchEngine(scenario_documents, settings=settings)


@pytest.fixture
def sample_documents() -> list[Document]:
    return build_sample_catalog()


@pytest.fixture
def sample_engine(sample_documents, settings) -> CourseSearchEngine:
    return CourseSearchEngine(sample_documents, settings=settings)
