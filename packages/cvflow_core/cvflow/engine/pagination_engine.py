"""
Pagination engine: builds one page of a résumé at a time.

Greedy placement with a one-step backtrack. Starting from a cursor, rows are
placed in document order until the accumulated height exceeds the page
capacity; the placement that overflowed is rolled back and its cursor is
where the next page resumes.

Placement rules:
- the first placement of a page is never rolled back, so every page holds at
  least one row even when that row alone is taller than the page
- a section title is measured as part of the same placement as the section's
  first row, so a title never ends a page on its own and never repeats on
  later pages
- rows are never split; singleton sections (header, summary) are one row
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import MalformedDocumentError
from ..models.section import Section, SectionType, clone_section, validate_document
from .measurement import (
    MeasurementCache,
    Oracle,
    RowUnit,
    TitleUnit,
    Unit,
    ameasure_unit,
    as_measure_fn,
    measure_unit,
)
from .page_engine import check_capacity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, order=True)
class Cursor:
    """Position of the next unplaced row."""
    section_index: int
    row_index: int = 0

    def is_terminal(self, sections: Sequence[Section]) -> bool:
        return self.section_index >= len(sections)

    def __str__(self) -> str:
        return f"({self.section_index}, {self.row_index})"


START = Cursor(0, 0)


def terminal_cursor(sections: Sequence[Section]) -> Cursor:
    return Cursor(len(sections), 0)


def advance(sections: Sequence[Section], cursor: Cursor) -> Cursor:
    """Cursor of the row following ``cursor`` in document order."""
    if cursor.row_index + 1 < len(sections[cursor.section_index].rows):
        return Cursor(cursor.section_index, cursor.row_index + 1)
    return Cursor(cursor.section_index + 1, 0)


def check_start_cursor(sections: Sequence[Section], cursor: Cursor) -> None:
    """Raise MalformedDocumentError unless ``cursor`` addresses an existing row."""
    if not 0 <= cursor.section_index < len(sections):
        raise MalformedDocumentError(
            f"Start cursor {cursor} is outside a document of {len(sections)} sections",
            error_code="invalid_cursor",
        )
    rows = sections[cursor.section_index].rows
    if not 0 <= cursor.row_index < len(rows):
        raise MalformedDocumentError(
            f"Start cursor {cursor} is outside section {cursor.section_index} ({len(rows)} rows)",
            section_index=cursor.section_index,
            error_code="invalid_cursor",
        )


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """Vertical position of one placed unit on its page."""
    offset: float
    height: float
    kind: str
    cursor: Cursor

    @property
    def bottom(self) -> float:
        return self.offset + self.height


class HeightLedger:
    """Ordered record of every unit placed on the page under construction."""

    def __init__(self):
        self._entries: List[LedgerEntry] = []

    @property
    def total(self) -> float:
        return self._entries[-1].bottom if self._entries else 0.0

    def record(self, kind: str, cursor: Cursor, height: float) -> LedgerEntry:
        entry = LedgerEntry(offset=self.total, height=height, kind=kind, cursor=cursor)
        self._entries.append(entry)
        return entry

    def truncate(self, length: int) -> None:
        del self._entries[length:]

    def snapshot(self) -> Tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self._entries)


@dataclass(frozen=True, slots=True)
class PartialSection:
    """
    Page-local copy of a section holding only the rows placed on that page.

    Published pages are read-only: rows are a tuple and the display setting is
    a read-only mapping.
    """
    source_index: int
    first_row_index: int
    show_title: bool
    section_type: SectionType
    section_title: str
    rows: Tuple[Any, ...]
    display_setting: Mapping[str, Any]
    column: int

    @classmethod
    def from_section(cls, source_index: int, first_row_index: int, show_title: bool,
                     section: Section) -> "PartialSection":
        return cls(
            source_index=source_index,
            first_row_index=first_row_index,
            show_title=show_title,
            section_type=section.section_type,
            section_title=section.section_title,
            rows=tuple(section.rows),
            display_setting=MappingProxyType(dict(section.display_setting)),
            column=section.column,
        )

    @property
    def has_title(self) -> bool:
        return self.section_type.has_title_unit and bool(self.section_title)

    @property
    def row_indices(self) -> range:
        return range(self.first_row_index, self.first_row_index + len(self.rows))


@dataclass(frozen=True, slots=True)
class Page:
    """One published page."""
    start_cursor: Cursor
    end_cursor: Cursor
    sections: Tuple[PartialSection, ...]
    content_height: float
    capacity: float
    ledger: Tuple[LedgerEntry, ...] = ()
    number: int = 1

    @property
    def row_count(self) -> int:
        return sum(len(part.rows) for part in self.sections)

    @property
    def overflows(self) -> bool:
        """True only for a page whose single placement is taller than the page."""
        return self.content_height > self.capacity


@dataclass(frozen=True, slots=True)
class PageResult:
    page: Page
    next_cursor: Cursor


@dataclass(slots=True)
class _PartDraft:
    source_index: int
    first_row_index: int
    show_title: bool
    rows: List = field(default_factory=list)


@dataclass(slots=True)
class _Pending:
    parts_length: int
    ledger_length: int
    content_height: float
    draft: _PartDraft


class PageBuilder:
    """
    In-progress page.

    A placement is speculative until ``commit``; ``rollback`` restores the
    state from before the last ``try_place``. Nothing built here is visible
    to callers until ``publish`` copies it into an immutable ``Page``.
    """

    def __init__(self, sections: Sequence[Section], start_cursor: Cursor, capacity: float):
        self._sections = sections
        self.start_cursor = start_cursor
        self.capacity = capacity
        self.ledger = HeightLedger()
        self.content_height = 0.0
        self._parts: List[_PartDraft] = []
        self._pending: Optional[_Pending] = None

    @property
    def is_empty(self) -> bool:
        return not self._parts

    def units_for(self, cursor: Cursor) -> List[Unit]:
        """Units placed together when the row at ``cursor`` is placed."""
        section = self._sections[cursor.section_index]
        row = RowUnit(cursor.section_index, cursor.row_index, section, section.rows[cursor.row_index])
        if cursor.row_index == 0 and section.has_title:
            return [TitleUnit(cursor.section_index, section), row]
        return [row]

    def try_place(self, cursor: Cursor, units: Sequence[Unit], heights: Sequence[float]) -> bool:
        """
        Speculatively place the row at ``cursor`` with its measured units.

        Returns:
            Whether the page still fits; the first placement always fits
        """
        if self._pending is not None:
            raise RuntimeError("Previous placement was neither committed nor rolled back")
        first = self.is_empty
        last = self._parts[-1] if self._parts else None
        if last is not None and last.source_index == cursor.section_index:
            draft = last
        else:
            draft = _PartDraft(
                source_index=cursor.section_index,
                first_row_index=cursor.row_index,
                show_title=any(isinstance(unit, TitleUnit) for unit in units),
            )
        self._pending = _Pending(len(self._parts), len(self.ledger), self.content_height, draft)

        if draft is not last:
            self._parts.append(draft)
        draft.rows.append(self._sections[cursor.section_index].rows[cursor.row_index])
        for unit, height in zip(units, heights):
            self.ledger.record(unit.kind, cursor, height)
            self.content_height += height

        if first:
            if self.content_height > self.capacity:
                logger.warning(
                    f"Row {cursor} is taller than the page ({self.content_height:.2f} > {self.capacity:.2f}); "
                    f"placing it alone"
                )
            return True
        return self.content_height <= self.capacity

    def commit(self) -> None:
        if self._pending is None:
            raise RuntimeError("Nothing to commit")
        self._pending = None

    def rollback(self) -> None:
        """Undo the last placement, dropping a page-section it left empty."""
        pending = self._pending
        if pending is None:
            raise RuntimeError("Nothing to roll back")
        if pending.parts_length == 0:
            raise RuntimeError("The first placement of a page cannot be rolled back")
        pending.draft.rows.pop()
        del self._parts[pending.parts_length:]
        self.ledger.truncate(pending.ledger_length)
        self.content_height = pending.content_height
        self._pending = None

    def publish(self, next_cursor: Cursor, number: int = 1) -> Page:
        if self._pending is not None:
            raise RuntimeError("Cannot publish a page with an unresolved placement")
        parts = tuple(
            PartialSection.from_section(
                draft.source_index,
                draft.first_row_index,
                draft.show_title,
                clone_section(self._sections[draft.source_index], draft.rows),
            )
            for draft in self._parts
        )
        return Page(
            start_cursor=self.start_cursor,
            end_cursor=next_cursor,
            sections=parts,
            content_height=self.content_height,
            capacity=self.capacity,
            ledger=self.ledger.snapshot(),
            number=number,
        )


def _prepare(sections: Sequence[Section], start_cursor: Cursor, capacity: float) -> float:
    capacity = check_capacity(capacity)
    validate_document(sections)
    check_start_cursor(sections, start_cursor)
    return capacity


def build_page(
    sections: Sequence[Section],
    start_cursor: Cursor,
    capacity: float,
    measure: Oracle,
    page_number: int = 1,
) -> PageResult:
    """
    Build the page that starts at ``start_cursor``.

    Args:
        sections: The whole document
        start_cursor: First unplaced row
        capacity: Usable page height
        measure: Oracle returning the height of a unit
        page_number: Number recorded on the published page

    Returns:
        PageResult with the page and the cursor the next page starts at;
        ``next_cursor.section_index == len(sections)`` when the document is done

    Raises:
        MalformedDocumentError: On an invalid document, cursor or capacity
        MeasurementError: If the oracle fails
    """
    capacity = _prepare(sections, start_cursor, capacity)
    return _build_page(sections, start_cursor, capacity, measure, page_number)


def _build_page(
    sections: Sequence[Section],
    start_cursor: Cursor,
    capacity: float,
    measure: Oracle,
    page_number: int,
) -> PageResult:
    """Page loop of ``build_page`` for inputs that were already validated."""
    measure_fn = as_measure_fn(measure)
    builder = PageBuilder(sections, start_cursor, capacity)

    cursor = start_cursor
    while not cursor.is_terminal(sections):
        units = builder.units_for(cursor)
        heights = [measure_unit(measure_fn, unit) for unit in units]
        if not builder.try_place(cursor, units, heights):
            builder.rollback()
            logger.debug(f"Page {page_number}: row {cursor} overflows, page closed at {builder.content_height:.2f}")
            break
        builder.commit()
        cursor = advance(sections, cursor)

    return PageResult(page=builder.publish(cursor, page_number), next_cursor=cursor)


async def abuild_page(
    sections: Sequence[Section],
    start_cursor: Cursor,
    capacity: float,
    measure: Oracle,
    page_number: int = 1,
) -> PageResult:
    """
    Async variant of ``build_page`` for oracles that render asynchronously.

    Each measurement is awaited before the next unit is considered; requests
    never overlap.
    """
    capacity = _prepare(sections, start_cursor, capacity)
    return await _abuild_page(sections, start_cursor, capacity, measure, page_number)


async def _abuild_page(
    sections: Sequence[Section],
    start_cursor: Cursor,
    capacity: float,
    measure: Oracle,
    page_number: int,
) -> PageResult:
    if isinstance(measure, MeasurementCache):
        ameasure = measure.ameasure
    else:
        measure_fn = as_measure_fn(measure)

        async def ameasure(unit: Unit) -> float:
            return await ameasure_unit(measure_fn, unit)

    builder = PageBuilder(sections, start_cursor, capacity)

    cursor = start_cursor
    while not cursor.is_terminal(sections):
        units = builder.units_for(cursor)
        heights = [await ameasure(unit) for unit in units]
        if not builder.try_place(cursor, units, heights):
            builder.rollback()
            logger.debug(f"Page {page_number}: row {cursor} overflows, page closed at {builder.content_height:.2f}")
            break
        builder.commit()
        cursor = advance(sections, cursor)

    return PageResult(page=builder.publish(cursor, page_number), next_cursor=cursor)
