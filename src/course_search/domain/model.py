"""Domain model - the course document entity.

Documents are immutable once loaded and identified by ``id``. They are
validated at construction with Pydantic dataclasses so a malformed record
fails before any index is built.
"""

from collections.abc import Mapping
import dataclasses
from typing import Annotated, Any, Self

from pydantic import Field
from pydantic.dataclasses import dataclass


_RECORD_ALIASES = {"viewCount": "view_count"}


@dataclass(frozen=True)
class Document:
    """A course record in the catalog.

    ``duration`` is kept verbatim ("H:MM"); it is parsed only when the facet
    index classifies the course. ``view_count`` is the display string shown
    by the catalog (e.g. "1.2K").
    """

    id: Annotated[str, Field(min_length=1)]
    title: str
    category: str
    instructor: str
    duration: str
    thumbnail: str = ""
    view_count: str = ""

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        """Build a document from a mapping with camelCase or snake_case keys."""
        known = {field.name for field in dataclasses.fields(cls)}
        data = {_RECORD_ALIASES.get(key, key): value for key, value in record.items()}
        data = {key: value for key, value in data.items() if key in known}
        if "view_count" in data and data["view_count"] is not None:
            data["view_count"] = str(data["view_count"])
        return cls(**data)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "instructor": self.instructor,
            "duration": self.duration,
            "thumbnail": self.thumbnail,
            "viewCount": self.view_count,
        }
