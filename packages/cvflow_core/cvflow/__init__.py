"""
cvflow - pagination engine for résumé documents.

Splits an ordered list of typed résumé sections into fixed-size pages,
deciding where each page breaks from measured unit heights.

Features:
- Greedy page filling with one-step rollback of the overflowing row
- Section titles kept together with the section's first row
- Pluggable measurement oracles (lookup tables, ReportLab font metrics, async renderers)
- Lazy, restartable page iteration
- JSON document import and page export, plus a command-line tool

Quick Start:
    from cvflow import PageOrchestrator, load_document

    design_font, sections = load_document("resume.json")
    pages = PageOrchestrator(design_font=design_font).paginate_all(sections)
"""

from .version import __version__, __version_info__

from .exceptions import (
    CvflowError,
    MalformedDocumentError,
    MeasurementError,
    PaginationError,
    DocumentImportError,
)
from .models import SectionType, Section, clone_section, validate_document
from .styles import DesignFont
from .engine import (
    PageConfig,
    Cursor,
    Page,
    PageResult,
    PartialSection,
    HeightLedger,
    TitleUnit,
    RowUnit,
    MeasurementCache,
    TableMeasurer,
    TextMetricsMeasurer,
    PageOrchestrator,
    build_page,
    abuild_page,
    paginate,
    apaginate,
)
from .importers import DocumentJSONImporter, load_document
from .export import PagesJSONExporter

__author__ = "cvflow contributors"

__all__ = [
    "__version__",
    "__version_info__",
    "CvflowError",
    "MalformedDocumentError",
    "MeasurementError",
    "PaginationError",
    "DocumentImportError",
    "SectionType",
    "Section",
    "clone_section",
    "validate_document",
    "DesignFont",
    "PageConfig",
    "Cursor",
    "Page",
    "PageResult",
    "PartialSection",
    "HeightLedger",
    "TitleUnit",
    "RowUnit",
    "MeasurementCache",
    "TableMeasurer",
    "TextMetricsMeasurer",
    "PageOrchestrator",
    "build_page",
    "abuild_page",
    "paginate",
    "apaginate",
    "DocumentJSONImporter",
    "load_document",
    "PagesJSONExporter",
]


def main():
    """CLI entry point."""
    from .cli import main as cli_main
    return cli_main()
