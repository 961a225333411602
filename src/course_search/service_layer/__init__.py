"""Service layer - orchestration used by presentation code."""

from course_search.service_layer.search_session import SearchSession


__all__ = ["SearchSession"]
