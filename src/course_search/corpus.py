"""Corpus sources: JSON catalog files and the bundled sample catalog."""

from __future__ import annotations

import logging
from pathlib import Path

import orjson
from pydantic import ValidationError

from course_search.domain.errors import CorpusLoadError
from course_search.domain.model import Document


logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES: tuple[str, ...] = (
    "Administración General del Estado",
    "Justicia",
    "Educación",
    "Sanidad",
    "Hacienda",
    "Policía Nacional",
    "Guardia Civil",
    "Instituciones Penitenciarias",
    "Ayuntamientos y Entidades Locales",
    "Comunidades Autónomas",
)

SAMPLE_INSTRUCTORS: tuple[str, ...] = (
    "María García",
    "Carlos Rodríguez",
    "Laura Martínez",
    "Javier López",
    "Ana Sánchez",
    "David Fernández",
    "Elena Gómez",
    "Pablo Díaz",
    "Cristina Hernández",
    "Miguel Torres",
)

SAMPLE_DURATIONS: tuple[str, ...] = (
    "3:45",
    "5:20",
    "2:30",
    "4:15",
    "6:10",
    "1:55",
    "7:40",
    "2:20",
    "3:05",
    "5:50",
)

SAMPLE_VIEWS: tuple[str, ...] = ("1.2K", "3.5K", "987", "7.1K", "543", "12K", "2.3K", "5.6K", "890", "4.7K")

SAMPLE_TITLES: tuple[str, ...] = (
    "Temario Completo Auxiliar Administrativo",
    "Preparación Examen Guardia Civil",
    "Psicotécnicos para Policía Nacional",
    "Casos Prácticos Enfermería SACYL",
    "Temario Maestros Educación Primaria",
    "Oposiciones Técnico de Hacienda",
    "Pruebas Físicas Bombero",
    "Temas Jurídicos Oposición Judicatura",
    "Preparación Celador SAS",
    "Temario Técnico Superior Administración",
    "Derecho Constitucional para TAI",
    "Test Guardia Civil 2024",
    "Procedimiento Administrativo Común",
    "Supuestos Prácticos Trabajo Social",
    "Derecho Penal para Instituciones Penitenciarias",
    "Idiomas para Cuerpo Diplomático",
    "Preparación Guardia Urbana Barcelona",
    "Temario Oposiciones Correos",
    "Casos Prácticos Administrativo de la Seguridad Social",
    "Pruebas Físicas Policía Local",
)


def sample_thumbnail(index: int) -> str:
    return f"https://picsum.photos/id/{index % 100 + 100}/320/180"


def build_sample_catalog(size: int = 100) -> list[Document]:
    """Generate the demo catalog of public-exam preparation courses.

    Titles repeat every 20 courses with an increasing edition number, so
    every generated title is unique.
    """
    documents = []
    for index in range(size):
        number = index + 1
        documents.append(
            Document(
                id=f"course_{number}",
                title=f"{SAMPLE_TITLES[index % len(SAMPLE_TITLES)]} (Edición {index // len(SAMPLE_TITLES) + 1})",
                category=SAMPLE_CATEGORIES[index % len(SAMPLE_CATEGORIES)],
                instructor=SAMPLE_INSTRUCTORS[index % len(SAMPLE_INSTRUCTORS)],
                duration=SAMPLE_DURATIONS[index % len(SAMPLE_DURATIONS)],
                thumbnail=sample_thumbnail(number),
                view_count=SAMPLE_VIEWS[index % len(SAMPLE_VIEWS)],
            )
        )
    return documents


def parse_documents(payload: bytes | str) -> list[Document]:
    """Parse a JSON array of course records.

    Raises:
        CorpusLoadError: If the payload is not a JSON array of valid records.
    """
    try:
        records = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        raise CorpusLoadError(f"Corpus is not valid JSON: {exc}") from exc

    if not isinstance(records, list):
        raise CorpusLoadError("Corpus must be a JSON array of course records")

    documents = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise CorpusLoadError(f"Record {position} is not a JSON object")
        try:
            documents.append(Document.from_record(record))
        except (ValidationError, TypeError) as exc:
            raise CorpusLoadError(f"Record {position} is not a valid course: {exc}") from exc
    return documents


def load_documents(path: Path) -> list[Document]:
    """Load a corpus from a JSON file."""
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise CorpusLoadError(f"Cannot read corpus file {path}: {exc}") from exc
    documents = parse_documents(payload)
    logger.info("Loaded %d documents from %s", len(documents), path)
    return documents
