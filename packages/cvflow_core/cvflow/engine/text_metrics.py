"""

TextMetricsEngine - calculating text width and wrapped height.

Uses ReportLab for font metrics and calculates:
- text width
- text height (accounting for line spacing)
- number of lines after greedy word wrapping

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from reportlab.pdfbase import pdfmetrics

# Base-14 families; always available in ReportLab without font files
FONT_VARIANTS = {
    "Helvetica": {
        (False, False): "Helvetica",
        (True, False): "Helvetica-Bold",
        (False, True): "Helvetica-Oblique",
        (True, True): "Helvetica-BoldOblique",
    },
    "Times-Roman": {
        (False, False): "Times-Roman",
        (True, False): "Times-Bold",
        (False, True): "Times-Italic",
        (True, True): "Times-BoldItalic",
    },
    "Courier": {
        (False, False): "Courier",
        (True, False): "Courier-Bold",
        (False, True): "Courier-Oblique",
        (True, True): "Courier-BoldOblique",
    },
}

FONT_FALLBACKS = {
    "arial": "Helvetica",
    "helvetica": "Helvetica",
    "sans-serif": "Helvetica",
    "inter": "Helvetica",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "times-roman": "Times-Roman",
    "serif": "Times-Roman",
    "georgia": "Times-Roman",
    "courier": "Courier",
    "courier new": "Courier",
    "monospace": "Courier",
}


def resolve_font_variant(font_name: Optional[str], bold: bool, italic: bool) -> str:
    """Map a family name plus weight/style flags onto a base-14 font name."""
    base = (font_name or "Helvetica").strip()
    if base not in FONT_VARIANTS:
        base = FONT_FALLBACKS.get(base.lower(), "Helvetica")
    return FONT_VARIANTS[base][(bool(bold), bool(italic))]


@dataclass(slots=True)
class TextLayout:
    """Result structure for text layout."""
    width: float
    height: float
    line_count: int = 1
    lines: List[str] = field(default_factory=list)
    font_size: float = 11.0


class TextMetricsEngine:
    """

    Engine for calculating text metrics.

    Uses ReportLab for width measurements and calculates height
    based on line spacing and number of lines.

    """

    def __init__(self):
        self._width_cache: Dict[tuple, float] = {}

    def _get_font_name(self, style: Dict[str, Any]) -> str:
        """

        Gets font name from style.

        Args:
        style: Dictionary with styles

        Returns:
        Font name to use in ReportLab

        """
        font_candidate = style.get("font_name") or style.get("font_family") or "Helvetica"
        bold = bool(style.get("bold") or style.get("font_weight") == "bold")
        italic = bool(style.get("italic") or style.get("font_style") == "italic")
        return resolve_font_variant(font_candidate, bold, italic)

    def string_width(self, text: str, font_name: str, font_size: float) -> float:
        key = (text, font_name, font_size)
        width = self._width_cache.get(key)
        if width is None:
            width = pdfmetrics.stringWidth(text, font_name, font_size)
            self._width_cache[key] = width
        return width

    def measure_text(self, text: str, style: Dict[str, Any]) -> Dict[str, float]:
        """

        Measures single-line text width and height.

        Args:
        text: Text to measure
        style: Dictionary with styles (font_name, font_size, line_spacing, etc.)

        Returns:
        Dict with metrics: {"width": float, "height": float, "line_count": int}

        """
        font_size = float(style.get("font_size", 11))
        line_spacing = float(style.get("line_spacing", 1.2))
        if not text:
            return {"width": 0.0, "height": font_size * line_spacing, "line_count": 1}

        font_name = self._get_font_name(style)
        return {
            "width": self.string_width(text, font_name, font_size),
            "height": font_size * line_spacing,
            "line_count": 1,
        }

    def layout_text(
        self,
        text: str,
        style: Optional[Dict[str, Any]] = None,
        max_width: Optional[float] = None
    ) -> TextLayout:
        """

        Lays out text into lines and calculates metrics.

        Args:
        text: Text to lay out
        style: Dictionary with styles
        max_width: Maximum width (optional, for line breaking)

        Returns:
        TextLayout with metrics and lines

        """
        if style is None:
            style = {}

        font_size = float(style.get("font_size", 11))
        line_spacing = float(style.get("line_spacing", 1.2))

        if not text:
            return TextLayout(
                width=0.0,
                height=font_size * line_spacing,
                line_count=1,
                lines=[],
                font_size=font_size
            )

        # If no max_width, just measure text
        if max_width is None:
            metrics = self.measure_text(text, style)
            return TextLayout(
                width=metrics["width"],
                height=metrics["height"],
                line_count=1,
                lines=[text],
                font_size=font_size
            )

        font_name = self._get_font_name(style)
        lines = self._break_text_into_lines(text, font_name, font_size, max_width)
        max_line_width = max(self.string_width(line, font_name, font_size) for line in lines)

        return TextLayout(
            width=max_line_width,
            height=len(lines) * font_size * line_spacing,
            line_count=len(lines),
            lines=lines,
            font_size=font_size
        )

    def _break_text_into_lines(
        self,
        text: str,
        font_name: str,
        font_size: float,
        max_width: float
    ) -> List[str]:
        """

        Breaks text into lines according to max_width.

        Args:
        text: Text to break
        font_name: Font name
        font_size: Font size
        max_width: Maximum line width

        Returns:
        List of text lines

        """
        words = text.split()
        if not words:
            return [""]

        lines: List[str] = []
        current_line = ""

        for word in words:
            # Try to add word to current line
            candidate = f"{current_line} {word}" if current_line else word
            if self.string_width(candidate, font_name, font_size) <= max_width:
                current_line = candidate
            elif current_line:
                lines.append(current_line)
                current_line = word
            else:
                # Word is too long - it still gets a line of its own
                lines.append(word)

        if current_line:
            lines.append(current_line)

        return lines if lines else [""]
