"""
Typed row contents for the common section kinds.

Rows stay opaque to the pagination engine. These records exist for the
importer and for the text-metrics oracle, which needs to know which fields of
a row render as which kind of text line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from .section import SectionType

# (role, text) pairs; role selects font size/weight in the measurer
TextBlock = Tuple[str, str]

HEADING = "heading"
SUBHEADING = "subheading"
META = "meta"
BODY = "body"
BULLET = "bullet"


def _join(*parts: Optional[str], sep: str = " | ") -> str:
    return sep.join(part for part in parts if part)


def _url(value: Any) -> str:
    if isinstance(value, Mapping):
        return str(value.get("url") or "")
    return str(value or "")


@dataclass(slots=True)
class HeaderContent:
    name: str = ""
    title: str = ""
    phone: str = ""
    email: str = ""
    link: str = ""
    extra_link: str = ""
    location: str = ""
    extra_field: str = ""
    profile_photo_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HeaderContent":
        return cls(
            name=data.get("name", ""),
            title=data.get("title", ""),
            phone=data.get("phone", ""),
            email=data.get("email", ""),
            link=data.get("link", ""),
            extra_link=data.get("extraLink", ""),
            location=data.get("location", ""),
            extra_field=data.get("extraField", ""),
            profile_photo_url=data.get("profilePhotoUrl", ""),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        """Lines of the header, honouring the header's show/hide flags."""
        settings = display_setting or {}

        def shown(flag: str, value: str) -> str:
            return value if settings.get(flag, True) else ""

        name = self.name.upper() if settings.get("nameUppercase") else self.name
        contact = _join(
            shown("showPhone", self.phone),
            shown("showEmail", self.email),
            shown("showLink", self.link),
            shown("showExtraLink", self.extra_link),
            shown("showLocation", self.location),
            shown("showExtraField", self.extra_field),
        )
        blocks: List[TextBlock] = [(HEADING, name), (SUBHEADING, self.title)]
        if contact:
            blocks.append((META, contact))
        return [block for block in blocks if block[1]]


@dataclass(slots=True)
class SummaryContent:
    text: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SummaryContent":
        return cls(text=data.get("text") or data.get("summary") or data.get("description", ""))

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        return [(BODY, self.text)] if self.text else []


@dataclass(slots=True)
class ExperienceContent:
    id: str = ""
    title: str = ""
    company_name: str = ""
    company_description: str = ""
    company_logo: str = ""
    location: str = ""
    period: str = ""
    bullet_items: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExperienceContent":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            company_name=data.get("companyName", ""),
            company_description=data.get("companyDescription", ""),
            company_logo=data.get("companyLogo", ""),
            location=data.get("location", ""),
            period=data.get("period", ""),
            bullet_items=list(data.get("bulletItems") or []),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        blocks: List[TextBlock] = [
            (SUBHEADING, self.title),
            (BODY, self.company_name),
            (META, _join(self.company_description, self.period, self.location)),
        ]
        blocks.extend((BULLET, item) for item in self.bullet_items)
        return [block for block in blocks if block[1]]


@dataclass(slots=True)
class EducationContent:
    title: str = ""
    gpa_value: str = ""
    gpa_max: str = ""
    location: str = ""
    period: str = ""
    bullet_items: List[str] = field(default_factory=list)
    institution_logo: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationContent":
        gpa = data.get("gpa") or {}
        return cls(
            title=data.get("title", ""),
            gpa_value=str(gpa.get("valueAt", "") or ""),
            gpa_max=str(gpa.get("valueMax", "") or ""),
            location=data.get("location", ""),
            period=data.get("period", ""),
            bullet_items=list(data.get("bulletItems") or []),
            institution_logo=_url(data.get("institutionLogo")),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        gpa = f"GPA {self.gpa_value} / {self.gpa_max}" if self.gpa_value else ""
        blocks: List[TextBlock] = [
            (SUBHEADING, self.title),
            (META, _join(self.period, self.location, gpa)),
        ]
        blocks.extend((BULLET, item) for item in self.bullet_items)
        return [block for block in blocks if block[1]]


@dataclass(slots=True)
class ProjectContent:
    id: str = ""
    title: str = ""
    description: str = ""
    bullet_items: List[str] = field(default_factory=list)
    location: str = ""
    period: str = ""
    link: str = ""
    sample_picture_urls: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectContent":
        pictures = data.get("samplePictures") or {}
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            bullet_items=list(data.get("bulletItems") or []),
            location=data.get("location", ""),
            period=data.get("period", ""),
            link=_url(data.get("link")),
            sample_picture_urls=list(pictures.get("urls") or []),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        blocks: List[TextBlock] = [
            (SUBHEADING, self.title),
            (META, _join(self.period, self.location, self.link)),
            (BODY, self.description),
        ]
        blocks.extend((BULLET, item) for item in self.bullet_items)
        return [block for block in blocks if block[1]]


@dataclass(slots=True)
class PublicationContent:
    id: str = ""
    title: str = ""
    publisher: str = ""
    authors: str = ""
    period: str = ""
    link: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PublicationContent":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            publisher=data.get("publisher", ""),
            authors=data.get("authors", ""),
            period=data.get("period", ""),
            link=_url(data.get("link")),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        blocks: List[TextBlock] = [
            (SUBHEADING, self.title),
            (BODY, self.publisher),
            (META, _join(self.period, self.link)),
            (BODY, self.authors),
        ]
        return [block for block in blocks if block[1]]


@dataclass(slots=True)
class LanguageContent:
    id: str = ""
    name: str = ""
    proficiency_label: str = ""
    proficiency_value: float = 0.0
    proficiency_max: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LanguageContent":
        slider = data.get("proficiencySlider") or {}
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            proficiency_label=data.get("proficiencyLabel", ""),
            proficiency_value=float(slider.get("valueAt", 0) or 0),
            proficiency_max=float(slider.get("valueMax", 0) or 0),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        return [(BODY, _join(self.name, self.proficiency_label, sep=" - "))]


@dataclass(slots=True)
class VolunteeringContent:
    id: str = ""
    title: str = ""
    institution: str = ""
    description: str = ""
    bullets: List[str] = field(default_factory=list)
    location: str = ""
    period: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VolunteeringContent":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            institution=data.get("institution", ""),
            description=data.get("description", ""),
            bullets=list(data.get("bullets") or []),
            location=data.get("location", ""),
            period=data.get("period", ""),
        )

    def text_blocks(self, display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
        blocks: List[TextBlock] = [
            (SUBHEADING, self.title),
            (BODY, self.institution),
            (META, _join(self.period, self.location)),
            (BODY, self.description),
        ]
        blocks.extend((BULLET, item) for item in self.bullets)
        return [block for block in blocks if block[1]]


CONTENT_TYPES: Dict[SectionType, Type[Any]] = {
    SectionType.HEADER: HeaderContent,
    SectionType.SUMMARY: SummaryContent,
    SectionType.EXPERIENCE: ExperienceContent,
    SectionType.EDUCATION: EducationContent,
    SectionType.PROJECT: ProjectContent,
    SectionType.PUBLICATION: PublicationContent,
    SectionType.LANGUAGE: LanguageContent,
    SectionType.VOLUNTEERING: VolunteeringContent,
}


def content_from_dict(section_type: SectionType, data: Any) -> Any:
    """
    Map a raw row onto its typed record.

    Rows of section types without a typed record (skills, interests,
    references, ...) are returned unchanged.
    """
    content_cls = CONTENT_TYPES.get(section_type)
    if content_cls is None or not isinstance(data, Mapping):
        return data
    return content_cls.from_dict(data)


def _generic_blocks(row: Any) -> List[TextBlock]:
    if row is None:
        return []
    if isinstance(row, str):
        return [(BODY, row)] if row else []
    if isinstance(row, Mapping):
        blocks: List[TextBlock] = []
        for key, value in row.items():
            if key == "id":
                continue
            if isinstance(value, str) and value:
                role = SUBHEADING if key in ("title", "name") else BODY
                blocks.append((role, value))
            elif isinstance(value, (list, tuple)):
                blocks.extend((BULLET, str(item)) for item in value if isinstance(item, str) and item)
        return blocks
    if isinstance(row, (list, tuple)):
        return [(BULLET, str(item)) for item in row if item]
    return [(BODY, str(row))]


def row_text_blocks(section_type: SectionType, row: Any,
                    display_setting: Optional[Mapping[str, Any]] = None) -> List[TextBlock]:
    """
    Text lines a row renders, in render order.

    Typed records describe themselves; raw mappings of a known section type
    are mapped first; anything else falls back to its string fields.
    """
    if hasattr(row, "text_blocks"):
        return row.text_blocks(display_setting)
    typed = content_from_dict(section_type, row)
    if typed is not row and hasattr(typed, "text_blocks"):
        return typed.text_blocks(display_setting)
    return _generic_blocks(row)
