"""Centralized configuration for course-search using Pydantic Settings."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every variable uses the ``COURSE_SEARCH_`` prefix, e.g.
    ``COURSE_SEARCH_QUERY_CACHE_MAX_ENTRIES=1000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="COURSE_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    catalog_name: str = Field(default="courses", min_length=1, description="Label attached to metrics and spans")

    # Matching
    fuzzy_candidate_threshold: int = Field(
        default=10,
        ge=0,
        description="Run the fuzzy pass when exact matching yields fewer candidates than this",
    )
    max_fuzzy_distance: int = Field(
        default=2,
        ge=0,
        description="Upper bound on the length-scaled edit distance accepted by the fuzzy pass",
    )

    # Suggestions
    suggestion_limit: int = Field(default=5, ge=1, description="Suggestions per field (titles, instructors, categories)")
    min_suggestion_query_length: int = Field(
        default=2,
        ge=0,
        description="Sessions only request suggestions once the query has this many characters",
    )
    highlight_open: str = Field(default="<b>", description="Marker inserted before a highlighted match")
    highlight_close: str = Field(default="</b>", description="Marker inserted after a highlighted match")

    # Caching
    query_cache_max_entries: int | None = Field(
        default=None,
        ge=1,
        description="LRU capacity of the query cache; unset keeps every query for the engine's lifetime",
    )

    # Corpus validation
    strict_durations: bool = Field(
        default=True,
        description="Reject malformed H:MM durations instead of excluding them from duration facets",
    )

    # Observability
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    metrics_enabled: bool = Field(default=True, description="Record Prometheus/OpenTelemetry metrics")
    tracing_enabled: bool = Field(default=True, description="Wrap index builds and queries in OpenTelemetry spans")

    @model_validator(mode="after")
    def _check_highlight_markers(self) -> "Settings":
        if bool(self.highlight_open) != bool(self.highlight_close):
            raise ValueError(
                "COURSE_SEARCH_HIGHLIGHT_OPEN and COURSE_SEARCH_HIGHLIGHT_CLOSE must both be set or both be empty"
            )
        return self
