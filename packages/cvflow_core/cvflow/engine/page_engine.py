"""Page capacity provider.

Every page of a résumé has the same size and margins, so the usable height
of a page is a single number computed once per pagination pass:

- page height minus top/bottom margins
- minus fixed header/footer bands (page borders, running footers)
- minus the design font's page-margin step on both sides
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..exceptions import MalformedDocumentError
from ..styles.design_font import DesignFont
from .geometry import Margins, Size, PAGE_SIZES, mm_to_points

DEFAULT_MARGIN_MM = 12.0


@dataclass(slots=True)
class PageConfig:
    """Configuration for page capacity."""
    page_size: Size
    base_margins: Margins
    header_height: float = 0.0
    footer_height: float = 0.0

    @classmethod
    def from_name(
        cls,
        name: str = "a4",
        design_font: Optional[DesignFont] = None,
        margin_mm: float = DEFAULT_MARGIN_MM,
        header_height: float = 0.0,
        footer_height: float = 0.0,
    ) -> "PageConfig":
        """Build a page of a named size with margins widened by the design font.

        Args:
            name: Page size name (``a4`` or ``letter``)
            design_font: Design settings; its page-margin step is added to every side
            margin_mm: Base margin on every side in millimetres
            header_height: Fixed band at the top of every page, in points
            footer_height: Fixed band at the bottom of every page, in points

        Returns:
            PageConfig for the named size
        """
        key = name.lower()
        if key not in PAGE_SIZES:
            raise ValueError(f"Unknown page size: {name!r} (expected one of {sorted(PAGE_SIZES)})")
        margins = Margins.uniform(mm_to_points(margin_mm))
        if design_font is not None:
            margins = margins + Margins.uniform(design_font.margin_pt)
        size = PAGE_SIZES[key]
        return cls(
            page_size=Size(size.width, size.height),
            base_margins=margins,
            header_height=header_height,
            footer_height=footer_height,
        )

    @classmethod
    def a4(cls, design_font: Optional[DesignFont] = None) -> "PageConfig":
        return cls.from_name("a4", design_font)

    @property
    def content_height(self) -> float:
        """Available content height (excluding margins, header and footer)."""
        return (
            self.page_size.height
            - self.base_margins.top
            - self.base_margins.bottom
            - self.header_height
            - self.footer_height
        )

    @property
    def content_width(self) -> float:
        """Available content width between the side margins."""
        return self.page_size.width - self.base_margins.left - self.base_margins.right

    def capacity(self) -> float:
        """Usable page height for pagination.

        Raises:
            MalformedDocumentError: If margins and bands leave no room for content
        """
        return check_capacity(self.content_height)


def check_capacity(capacity: float) -> float:
    """Validate a page capacity and return it as float."""
    if isinstance(capacity, bool) or not isinstance(capacity, (int, float)):
        raise MalformedDocumentError(
            f"Page capacity must be a number, got {type(capacity).__name__}",
            error_code="invalid_capacity",
        )
    if not capacity > 0:
        raise MalformedDocumentError(
            f"Page capacity must be positive, got {capacity}",
            error_code="invalid_capacity",
            details={"capacity": capacity},
        )
    return float(capacity)
