"""Design settings that influence measured heights."""

from .design_font import DesignFont, DEFAULT_DESIGN_FONT, ROLE_SCALES

__all__ = ["DesignFont", "DEFAULT_DESIGN_FONT", "ROLE_SCALES"]
