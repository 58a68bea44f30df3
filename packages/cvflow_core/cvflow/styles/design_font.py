"""
Design/font settings of a résumé.

Mirrors the editor's design panel: paper background, page margin step,
column layout, section spacing step, colours, font family, font size and
line height. Only the values that change measured heights are resolved to
points here; colours and backgrounds are carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

# Editor steps are resolved to points with these factors
MARGIN_STEP_PT = 12.0
SECTION_SPACING_STEP_PT = 8.0
BASE_LINE_SPACING = 1.2
DEFAULT_FONT_SIZE_PT = 10.5

FONT_FAMILIES = {
    0: "Helvetica",
    1: "Times-Roman",
    2: "Courier",
}

FONT_SIZE_NAMES = {
    "xs": 9.0,
    "sm": 10.0,
    "base": 11.0,
    "lg": 12.0,
    "xl": 13.0,
}

# Size of each text role relative to the body font size
ROLE_SCALES = {
    "title": 1.3,
    "heading": 1.8,
    "subheading": 1.1,
    "meta": 0.9,
    "body": 1.0,
    "bullet": 1.0,
}

BOLD_ROLES = frozenset({"title", "heading", "subheading"})


@dataclass(slots=True)
class DesignFont:
    """Global design configuration shared by every page of a document."""

    paper_background_image: str = ""
    page_margin: float = 0
    column_layout_option: int = 1
    section_spacing: float = 1
    font_size: str = ""
    font_style: int = 0
    line_height: float = 1
    primary_color: str = "orange-700"
    secondary_color: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "DesignFont":
        """Build from the editor's camelCase mapping; missing keys keep defaults."""
        data = data or {}
        defaults = cls()
        return cls(
            paper_background_image=data.get("paperBackgroundImage", defaults.paper_background_image),
            page_margin=float(data.get("pageMargin", defaults.page_margin)),
            column_layout_option=int(data.get("columnLayoutOption", defaults.column_layout_option)),
            section_spacing=float(data.get("sectionSpacing", defaults.section_spacing)),
            font_size=str(data.get("fontSize", defaults.font_size) or ""),
            font_style=int(data.get("fontStyle", defaults.font_style)),
            line_height=float(data.get("lineHeight", defaults.line_height)),
            primary_color=data.get("primaryColor", defaults.primary_color),
            secondary_color=data.get("secondaryColor", defaults.secondary_color),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "paperBackgroundImage": data["paper_background_image"],
            "pageMargin": data["page_margin"],
            "columnLayoutOption": data["column_layout_option"],
            "sectionSpacing": data["section_spacing"],
            "fontSize": data["font_size"],
            "fontStyle": data["font_style"],
            "lineHeight": data["line_height"],
            "primaryColor": data["primary_color"],
            "secondaryColor": data["secondary_color"],
        }

    @property
    def font_size_pt(self) -> float:
        """Body font size in points; accepts size names, ``text-*`` classes or numbers."""
        value = self.font_size.strip().lower()
        if not value:
            return DEFAULT_FONT_SIZE_PT
        if value.startswith("text-"):
            value = value[len("text-"):]
        if value in FONT_SIZE_NAMES:
            return FONT_SIZE_NAMES[value]
        try:
            return float(value.rstrip("pt"))
        except ValueError:
            return DEFAULT_FONT_SIZE_PT

    @property
    def font_family(self) -> str:
        return FONT_FAMILIES.get(self.font_style, FONT_FAMILIES[0])

    @property
    def line_spacing(self) -> float:
        return BASE_LINE_SPACING * self.line_height

    @property
    def margin_pt(self) -> float:
        return self.page_margin * MARGIN_STEP_PT

    @property
    def section_spacing_pt(self) -> float:
        return self.section_spacing * SECTION_SPACING_STEP_PT

    def text_style(self, role: str) -> Dict[str, Any]:
        """
        Style mapping for a text role, in the shape TextMetricsEngine expects.

        Args:
            role: One of the keys of ``ROLE_SCALES``

        Returns:
            Dict with font_name, font_size, line_spacing and bold
        """
        scale = ROLE_SCALES.get(role, 1.0)
        return {
            "font_name": self.font_family,
            "font_size": round(self.font_size_pt * scale, 2),
            "line_spacing": self.line_spacing,
            "bold": role in BOLD_ROLES,
        }


DEFAULT_DESIGN_FONT = DesignFont()
