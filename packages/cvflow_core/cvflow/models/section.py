"""
Section model for résumé documents.

A document is an ordered list of sections. Each section has a type tag, a
title, ordered rows and an opaque display-setting mapping. Rows are opaque to
the pagination engine; only the measurement oracle looks inside them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence, Union
import logging

from ..exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)


class SectionType(str, Enum):
    """Section kinds a résumé can be composed of, in editor order."""

    HEADER = "header"
    ACHIEVEMENT = "achievement"
    CERTIFICATION = "certification"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    INTEREST = "interest"
    LANGUAGE = "language"
    PROJECT = "project"
    PUBLICATION = "publication"
    REFERENCE = "reference"
    SKILL = "skill"
    SOCIAL_MEDIA = "social_media"
    STRENGTH = "strength"
    SUMMARY = "summary"
    TRAINING_COURSE = "training_course"
    VOLUNTEERING = "volunteering"

    @classmethod
    def from_value(cls, value: Union[int, str, "SectionType"]) -> "SectionType":
        """
        Resolve a section type from an ordinal, a value or a member name.

        The editor stores section types as ordinals, hand-written documents
        usually use names such as ``"experience"`` or ``"TrainingCourse"``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid section type: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Section type ordinal out of range: {value}")
        if isinstance(value, str):
            normalized = value.strip()
            for member in cls:
                if normalized.lower() == member.value:
                    return member
            # CamelCase names ("SocialMedia") map onto snake_case values
            snake = "".join(
                f"_{ch.lower()}" if ch.isupper() and i else ch.lower()
                for i, ch in enumerate(normalized)
            )
            for member in cls:
                if snake == member.value:
                    return member
        raise ValueError(f"Unknown section type: {value!r}")

    @property
    def is_singleton(self) -> bool:
        """Singleton sections hold one synthetic row with the whole body."""
        return self in SINGLETON_SECTION_TYPES

    @property
    def has_title_unit(self) -> bool:
        """The header renders no separate section title."""
        return self is not SectionType.HEADER


SINGLETON_SECTION_TYPES = frozenset({SectionType.HEADER, SectionType.SUMMARY})


@dataclass(slots=True)
class Section:
    """One typed section of a document."""

    section_type: SectionType
    section_title: str
    rows: List[Any] = field(default_factory=list)
    display_setting: Dict[str, Any] = field(default_factory=dict)
    column: int = 0

    @property
    def is_singleton(self) -> bool:
        return self.section_type.is_singleton

    @property
    def has_title(self) -> bool:
        """Whether a measured title unit precedes the section's first row."""
        return self.section_type.has_title_unit and bool(self.section_title)

    def __len__(self) -> int:
        return len(self.rows)


def clone_section(section: Section, rows: Sequence[Any] | None = None) -> Section:
    """
    Copy a section for page-local use.

    The row list and display-setting mapping are new objects; row contents
    are shared with the source section.

    Args:
        section: Section to copy
        rows: Rows for the copy (defaults to all rows of ``section``)

    Returns:
        New Section that can be mutated without touching ``section``
    """
    return Section(
        section_type=section.section_type,
        section_title=section.section_title,
        rows=list(section.rows if rows is None else rows),
        display_setting=dict(section.display_setting),
        column=section.column,
    )


def validate_document(sections: Sequence[Section]) -> None:
    """
    Check a document before pagination.

    Raises:
        MalformedDocumentError: If a section has no rows, or a singleton
            section does not have exactly one row.
    """
    for index, section in enumerate(sections):
        if not isinstance(section, Section):
            raise MalformedDocumentError(
                f"Document entry {index} is not a Section: {type(section).__name__}",
                section_index=index,
            )
        if not section.rows:
            raise MalformedDocumentError(
                f"Section {index} ({section.section_type.value}) has no rows",
                section_index=index,
                details={"section_title": section.section_title},
            )
        if section.is_singleton and len(section.rows) != 1:
            raise MalformedDocumentError(
                f"Singleton section {index} ({section.section_type.value}) must have exactly one row, "
                f"got {len(section.rows)}",
                section_index=index,
            )
    logger.debug(f"Validated document with {len(sections)} sections")


def count_rows(sections: Sequence[Section]) -> int:
    """Total number of rows in a document."""
    return sum(len(section.rows) for section in sections)
