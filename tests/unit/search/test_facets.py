"""Unit tests for facet classification and aggregation."""

import logging

import pytest

from course_search.domain.errors import MalformedDurationError
from course_search.domain.model import Document
from course_search.domain.search import DifficultyLevel, DurationBucket, FacetDimension, Filters
from course_search.search.facets import (
    FacetIndex,
    classify_duration,
    classify_level,
    duration_to_minutes,
    facet_id_for,
)


def _counts(options):
    return {option.id: option.count for option in options}


@pytest.mark.unit
class TestHelpers:
    def test_facet_id_replaces_non_word_characters(self):
        assert facet_id_for("Guardia Civil") == "guardia_civil"
        assert facet_id_for("Informática") == "inform_tica"
        assert facet_id_for("Ayuntamientos y Entidades Locales") == "ayuntamientos_y_entidades_locales"

    def test_duration_to_minutes(self):
        assert duration_to_minutes("5:00") == 300
        assert duration_to_minutes("2:30") == 150
        assert duration_to_minutes("0:05") == 5
        assert duration_to_minutes("10:15") == 615

    @pytest.mark.parametrize("duration", ["", "abc", "3", "3:xx", "h:30", "3:30:00", "-1:30"])
    def test_malformed_duration_raises(self, duration):
        with pytest.raises(MalformedDurationError):
            duration_to_minutes(duration)

    def test_duration_bucket_boundaries(self):
        assert classify_duration(0) is DurationBucket.SHORT
        assert classify_duration(179) is DurationBucket.SHORT
        assert classify_duration(180) is DurationBucket.MEDIUM
        assert classify_duration(359) is DurationBucket.MEDIUM
        assert classify_duration(360) is DurationBucket.LONG

    def test_level_keywords(self):
        assert classify_level("Curso Básico de Excel") is DifficultyLevel.BEGINNER
        assert classify_level("INTRODUCCIÓN al Derecho") is DifficultyLevel.BEGINNER
        assert classify_level("Inglés Avanzado") is DifficultyLevel.ADVANCED
        assert classify_level("Temario Técnico Superior Administración") is DifficultyLevel.ADVANCED
        assert classify_level("Test Guardia Civil 2024") is DifficultyLevel.INTERMEDIATE

    def test_beginner_wins_over_advanced(self):
        assert classify_level("Introducción avanzado") is DifficultyLevel.BEGINNER

    def test_level_matching_is_literal(self):
        # Gendered variants and unaccented spellings do not match
        assert classify_level("Programación Avanzada") is DifficultyLevel.INTERMEDIATE
        assert classify_level("Curso basico") is DifficultyLevel.INTERMEDIATE


@pytest.mark.unit
class TestFacetIndex:
    def test_scenario_levels(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        assert _counts(index.levels()) == {"beginner": 2, "intermediate": 1, "advanced": 0}

    def test_scenario_durations(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        assert _counts(index.durations()) == {"short": 2, "medium": 1, "long": 0}

    def test_scenario_categories(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        options = index.categories()
        assert [(option.id, option.label, option.count) for option in options] == [
            ("inform_tica", "Informática", 2),
            ("ofim_tica", "Ofimática", 1),
        ]

    def test_labels(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        assert [option.label for option in index.durations()] == ["Corta (< 3h)", "Media (3-6h)", "Larga (> 6h)"]
        assert [option.label for option in index.levels()] == ["Principiante", "Intermedio", "Avanzado"]

    def test_count_invariant_on_sample_catalog(self, sample_documents):
        index = FacetIndex(sample_documents)
        total = len(sample_documents)
        assert sum(option.count for option in index.durations()) == total
        assert sum(option.count for option in index.levels()) == total
        assert sum(option.count for option in index.categories()) == total

    def test_empty_corpus_has_zero_counts(self):
        index = FacetIndex([])
        assert index.categories() == []
        assert _counts(index.durations()) == {"short": 0, "medium": 0, "long": 0}

    def test_options_returns_copies(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        index.levels().clear()
        assert len(index.levels()) == 3

    def test_members(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        assert index.members(FacetDimension.LEVEL, "beginner") == {"D2", "D3"}
        assert index.members(FacetDimension.CATEGORY, "unknown") == frozenset()


@pytest.mark.unit
class TestMalformedDurations:
    def _documents(self):
        return [
            Document(id="ok", title="Temario", category="Justicia", instructor="Ana", duration="2:00"),
            Document(id="bad", title="Temario", category="Justicia", instructor="Ana", duration="dos horas"),
        ]

    def test_strict_mode_raises_with_document_id(self):
        with pytest.raises(MalformedDurationError) as exc_info:
            FacetIndex(self._documents())
        assert exc_info.value.doc_id == "bad"
        assert exc_info.value.duration == "dos horas"

    def test_lenient_mode_excludes_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="course_search.search.facets"):
            index = FacetIndex(self._documents(), strict_durations=False)

        assert index.skipped_durations == ["bad"]
        assert sum(option.count for option in index.durations()) == 1
        assert sum(option.count for option in index.levels()) == 2
        assert "bad" in caplog.text

    def test_lenient_mode_excluded_document_matches_no_duration_filter(self):
        index = FacetIndex(self._documents(), strict_durations=False)
        filters = Filters(durations={"short", "medium", "long"})
        assert index.filter_ids(["ok", "bad"], filters) == {"ok"}


@pytest.mark.unit
class TestMatching:
    def test_or_within_dimension(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        filters = Filters(durations={"short", "medium"})
        assert index.filter_ids(["D1", "D2", "D3"], filters) == {"D1", "D2", "D3"}

    def test_and_across_dimensions(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        filters = Filters(categories={"inform_tica"}, levels={"beginner"})
        assert index.filter_ids(["D1", "D2", "D3"], filters) == {"D2"}

    def test_unknown_facet_id_matches_nothing(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        assert index.filter_ids(["D1", "D2", "D3"], Filters(levels={"expert"})) == set()

    def test_no_active_filters_keeps_everything(self, scenario_documents):
        index = FacetIndex(scenario_documents)
        assert index.matches("D1", Filters())
