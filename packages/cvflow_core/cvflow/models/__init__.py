"""
Document models: sections and typed row contents.
"""

from .section import (
    SectionType,
    Section,
    SINGLETON_SECTION_TYPES,
    clone_section,
    validate_document,
    count_rows,
)
from .contents import (
    HeaderContent,
    SummaryContent,
    ExperienceContent,
    EducationContent,
    ProjectContent,
    PublicationContent,
    LanguageContent,
    VolunteeringContent,
    CONTENT_TYPES,
    content_from_dict,
    row_text_blocks,
)

__all__ = [
    "SectionType",
    "Section",
    "SINGLETON_SECTION_TYPES",
    "clone_section",
    "validate_document",
    "count_rows",
    "HeaderContent",
    "SummaryContent",
    "ExperienceContent",
    "EducationContent",
    "ProjectContent",
    "PublicationContent",
    "LanguageContent",
    "VolunteeringContent",
    "CONTENT_TYPES",
    "content_from_dict",
    "row_text_blocks",
]
