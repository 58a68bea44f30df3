"""
Page orchestrator: drives the pagination engine over a whole document.

``paginate`` is a lazy generator of pages. Each page is a pure function of
the document, the cursor it starts at and the capacity, so a pass can be
restarted from any ``Page.end_cursor`` and produces the same remaining pages.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Iterator, List, Optional, Sequence

from ..exceptions import PaginationError
from ..models.section import Section, count_rows, validate_document
from ..styles.design_font import DesignFont
from .measurement import MeasurementCache, Oracle, TextMetricsMeasurer
from .page_engine import PageConfig, check_capacity
from .pagination_engine import (
    START,
    Cursor,
    Page,
    _abuild_page,
    _build_page,
    check_start_cursor,
)

logger = logging.getLogger(__name__)


def _per_pass_cache(measure: Oracle) -> MeasurementCache:
    if isinstance(measure, MeasurementCache):
        return measure
    return MeasurementCache(measure)


def _check_progress(start: Cursor, next_cursor: Cursor) -> None:
    if not next_cursor > start:
        raise PaginationError(
            f"Pagination made no progress: page starting at {start} ended at {next_cursor}",
            cursor=start,
        )


def _prepare(sections: Sequence[Section], capacity: float, start: Cursor) -> float:
    capacity = check_capacity(capacity)
    validate_document(sections)
    if sections:
        check_start_cursor(sections, start)
    return capacity


def paginate(
    sections: Sequence[Section],
    capacity: float,
    measure: Oracle,
    start: Cursor = START,
    first_page_number: int = 1,
) -> Iterator[Page]:
    """
    Split a document into pages.

    The document, cursor and capacity are validated eagerly; pages are built
    lazily as the returned iterator is consumed. Every unit is measured at
    most once per pass.

    Args:
        sections: The document
        capacity: Usable page height
        measure: Measurement oracle
        start: Cursor of the first row to place
        first_page_number: Number of the first yielded page

    Returns:
        Iterator of pages in order; empty for an empty document

    Raises:
        MalformedDocumentError: On an invalid document, cursor or capacity
    """
    capacity = _prepare(sections, capacity, start)
    return _iter_pages(sections, capacity, _per_pass_cache(measure), start, first_page_number)


def _iter_pages(
    sections: Sequence[Section],
    capacity: float,
    cache: MeasurementCache,
    start: Cursor,
    number: int,
) -> Iterator[Page]:
    cursor = start
    while not cursor.is_terminal(sections):
        result = _build_page(sections, cursor, capacity, cache, number)
        _check_progress(cursor, result.next_cursor)
        logger.debug(
            f"Page {number}: rows {cursor} -> {result.next_cursor}, "
            f"height {result.page.content_height:.2f}/{capacity:.2f}"
        )
        yield result.page
        cursor = result.next_cursor
        number += 1


def apaginate(
    sections: Sequence[Section],
    capacity: float,
    measure: Oracle,
    start: Cursor = START,
    first_page_number: int = 1,
) -> AsyncIterator[Page]:
    """Async variant of ``paginate`` for oracles returning awaitables."""
    capacity = _prepare(sections, capacity, start)
    return _aiter_pages(sections, capacity, _per_pass_cache(measure), start, first_page_number)


async def _aiter_pages(
    sections: Sequence[Section],
    capacity: float,
    cache: MeasurementCache,
    start: Cursor,
    number: int,
) -> AsyncIterator[Page]:
    cursor = start
    while not cursor.is_terminal(sections):
        result = await _abuild_page(sections, cursor, capacity, cache, number)
        _check_progress(cursor, result.next_cursor)
        yield result.page
        cursor = result.next_cursor
        number += 1


class PageOrchestrator:
    """
    Paginates documents against one page configuration.

    Bundles the capacity provider with a measurement oracle. Without an
    explicit oracle, heights are estimated from font metrics at the page's
    content width. Each call starts a fresh pass with its own cache.
    """

    def __init__(
        self,
        page_config: Optional[PageConfig] = None,
        oracle: Optional[Oracle] = None,
        design_font: Optional[DesignFont] = None,
        capacity: Optional[float] = None,
    ):
        """
        Initialize page orchestrator.

        Args:
            page_config: Page geometry (defaults to A4 with the design font's margins)
            oracle: Measurement oracle (defaults to TextMetricsMeasurer)
            design_font: Design settings for the default oracle and page margins
            capacity: Explicit page capacity overriding the page geometry
        """
        self.design_font = design_font or DesignFont()
        self.page_config = page_config or PageConfig.a4(self.design_font)
        self.capacity = check_capacity(capacity) if capacity is not None else self.page_config.capacity()
        if oracle is None:
            oracle = TextMetricsMeasurer(self.design_font, self.page_config.content_width)
        self.oracle = oracle

    def paginate(self, sections: Sequence[Section], start: Cursor = START) -> Iterator[Page]:
        return paginate(sections, self.capacity, self.oracle, start=start)

    def paginate_all(self, sections: Sequence[Section]) -> List[Page]:
        """Paginate a whole document and log a summary."""
        pages = list(self.paginate(sections))
        oversized = [page.number for page in pages if page.overflows]
        logger.info(
            f"Paginated {len(sections)} sections ({count_rows(sections)} rows) "
            f"into {len(pages)} pages at capacity {self.capacity:.2f}"
        )
        if oversized:
            logger.warning(f"Pages holding a single row taller than the page: {oversized}")
        return pages

    async def apaginate_all(self, sections: Sequence[Section]) -> List[Page]:
        return [page async for page in apaginate(sections, self.capacity, self.oracle)]
