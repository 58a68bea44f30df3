"""
Layout engine: measurement, page capacity and pagination.
"""

from .geometry import Size, Margins, PAGE_SIZES
from .page_engine import PageConfig, check_capacity
from .text_metrics import TextMetricsEngine, TextLayout
from .measurement import (
    TitleUnit,
    RowUnit,
    MeasurementOracle,
    MeasurementCache,
    TableMeasurer,
    TextMetricsMeasurer,
)
from .pagination_engine import (
    Cursor,
    START,
    LedgerEntry,
    HeightLedger,
    PartialSection,
    Page,
    PageResult,
    PageBuilder,
    advance,
    terminal_cursor,
    build_page,
    abuild_page,
)
from .page_orchestrator import PageOrchestrator, paginate, apaginate

__all__ = [
    "Size",
    "Margins",
    "PAGE_SIZES",
    "PageConfig",
    "check_capacity",
    "TextMetricsEngine",
    "TextLayout",
    "TitleUnit",
    "RowUnit",
    "MeasurementOracle",
    "MeasurementCache",
    "TableMeasurer",
    "TextMetricsMeasurer",
    "Cursor",
    "START",
    "LedgerEntry",
    "HeightLedger",
    "PartialSection",
    "Page",
    "PageResult",
    "PageBuilder",
    "advance",
    "terminal_cursor",
    "build_page",
    "abuild_page",
    "PageOrchestrator",
    "paginate",
    "apaginate",
]
