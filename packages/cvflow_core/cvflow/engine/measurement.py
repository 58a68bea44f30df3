"""
Measurement oracles.

The pagination engine never computes heights itself. It hands a unit (a
section title or a single row) to an oracle and receives the unit's occupied
height in the same units as the page capacity. This module provides:

- the unit types the engine measures,
- ``TableMeasurer``, a lookup-table oracle for tests and tooling,
- ``TextMetricsMeasurer``, a headless oracle based on ReportLab font metrics,
- ``MeasurementCache``, a per-pass memoising wrapper around any oracle.

An oracle is either a callable ``(unit) -> float`` or an object with a
``measure(unit)`` method. Async oracles return awaitables; they are only
accepted by the async entry points.
"""

from __future__ import annotations

import inspect
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

from ..exceptions import MeasurementError
from ..models.contents import BULLET, row_text_blocks
from ..models.section import Section
from ..styles.design_font import DesignFont
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

UnitKey = Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class TitleUnit:
    """Title of the section at ``section_index``."""
    section_index: int
    section: Section = field(compare=False, repr=False)

    @property
    def kind(self) -> str:
        return "title"

    @property
    def key(self) -> UnitKey:
        return ("title", self.section_index)


@dataclass(frozen=True, slots=True)
class RowUnit:
    """Row ``row_index`` of the section at ``section_index``."""
    section_index: int
    row_index: int
    section: Section = field(compare=False, repr=False)
    row: Any = field(default=None, compare=False, repr=False)

    @property
    def kind(self) -> str:
        return "row"

    @property
    def key(self) -> UnitKey:
        return ("row", self.section_index, self.row_index)


Unit = Union[TitleUnit, RowUnit]


class MeasurementOracle(Protocol):
    def measure(self, unit: Unit) -> float: ...


MeasureFn = Callable[[Unit], Union[float, Awaitable[float]]]
Oracle = Union[MeasurementOracle, MeasureFn]


def as_measure_fn(oracle: Oracle) -> MeasureFn:
    """Return the callable behind an oracle object or function."""
    measure = getattr(oracle, "measure", None)
    if callable(measure):
        return measure
    if callable(oracle):
        return oracle
    raise TypeError(f"Not a measurement oracle: {oracle!r}")


def checked_height(value: Any, unit: Unit) -> float:
    """
    Validate a height returned by an oracle.

    Raises:
        MeasurementError: If the value is not a finite, non-negative number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MeasurementError(
            f"Oracle returned a non-numeric height for {unit.key}: {value!r}",
            unit_key=unit.key,
            error_code="invalid_height",
        )
    if not math.isfinite(value) or value < 0:
        raise MeasurementError(
            f"Oracle returned an invalid height for {unit.key}: {value!r}",
            unit_key=unit.key,
            error_code="invalid_height",
        )
    return float(value)


def measure_unit(measure: MeasureFn, unit: Unit) -> float:
    """Measure one unit synchronously; any oracle fault becomes MeasurementError."""
    try:
        value = measure(unit)
    except MeasurementError:
        raise
    except Exception as exc:
        raise MeasurementError(f"Measuring {unit.key} failed: {exc}", unit_key=unit.key, cause=exc) from exc
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise MeasurementError(
            f"Oracle returned an awaitable for {unit.key}; use the async entry points",
            unit_key=unit.key,
            error_code="async_oracle",
        )
    return checked_height(value, unit)


async def ameasure_unit(measure: MeasureFn, unit: Unit) -> float:
    """Measure one unit, awaiting the oracle if it is asynchronous."""
    try:
        value = measure(unit)
        if inspect.isawaitable(value):
            value = await value
    except MeasurementError:
        raise
    except Exception as exc:
        raise MeasurementError(f"Measuring {unit.key} failed: {exc}", unit_key=unit.key, cause=exc) from exc
    return checked_height(value, unit)


class MeasurementCache:
    """
    Memoises heights per unit key for one pagination pass.

    Heights depend on the global design settings, so a cache must not outlive
    the pass it was created for.
    """

    def __init__(self, oracle: Oracle):
        self._measure = as_measure_fn(oracle)
        self._heights: Dict[UnitKey, float] = {}
        self.hits = 0
        self.misses = 0

    def measure(self, unit: Unit) -> float:
        height = self._heights.get(unit.key)
        if height is not None:
            self.hits += 1
            return height
        self.misses += 1
        height = measure_unit(self._measure, unit)
        self._heights[unit.key] = height
        return height

    async def ameasure(self, unit: Unit) -> float:
        height = self._heights.get(unit.key)
        if height is not None:
            self.hits += 1
            return height
        self.misses += 1
        height = await ameasure_unit(self._measure, unit)
        self._heights[unit.key] = height
        return height

    def __len__(self) -> int:
        return len(self._heights)

    def clear(self) -> None:
        self._heights.clear()
        self.hits = 0
        self.misses = 0


class TableMeasurer:
    """
    Oracle answering from lookup tables.

    ``row_heights`` is either a sequence of per-section height lists or a
    mapping ``{(section_index, row_index): height}``. ``title_heights`` is a
    sequence or mapping indexed by section; missing titles measure
    ``default_title_height``.
    """

    def __init__(
        self,
        row_heights: Union[Sequence[Sequence[float]], Mapping[Tuple[int, int], float]],
        title_heights: Union[Sequence[float], Mapping[int, float], None] = None,
        default_title_height: float = 0.0,
    ):
        if isinstance(row_heights, Mapping):
            self.row_heights = dict(row_heights)
        else:
            self.row_heights = {
                (section_index, row_index): height
                for section_index, heights in enumerate(row_heights)
                for row_index, height in enumerate(heights)
            }
        if title_heights is None:
            self.title_heights: Dict[int, float] = {}
        elif isinstance(title_heights, Mapping):
            self.title_heights = dict(title_heights)
        else:
            self.title_heights = dict(enumerate(title_heights))
        self.default_title_height = default_title_height
        self.calls: List[UnitKey] = []

    def measure(self, unit: Unit) -> float:
        self.calls.append(unit.key)
        if isinstance(unit, TitleUnit):
            return self.title_heights.get(unit.section_index, self.default_title_height)
        try:
            return self.row_heights[(unit.section_index, unit.row_index)]
        except KeyError:
            raise KeyError(f"No height for row {unit.row_index} of section {unit.section_index}") from None


class TextMetricsMeasurer:
    """
    Headless oracle estimating rendered heights from font metrics.

    Every text line of a unit is wrapped to the content width with
    ReportLab string widths; the unit height is the sum of wrapped line
    heights plus fixed padding. Section titles also carry the design's
    section spacing above them.
    """

    def __init__(
        self,
        design_font: Optional[DesignFont] = None,
        content_width: float = 500.0,
        metrics: Optional[TextMetricsEngine] = None,
        row_padding: float = 4.0,
        bullet_indent: float = 12.0,
        title_rule_gap: float = 3.0,
    ):
        if content_width <= 0:
            raise ValueError(f"content_width must be positive, got {content_width}")
        self.design_font = design_font or DesignFont()
        self.content_width = float(content_width)
        self.metrics = metrics or TextMetricsEngine()
        self.row_padding = row_padding
        self.bullet_indent = bullet_indent
        self.title_rule_gap = title_rule_gap

    def measure(self, unit: Unit) -> float:
        if isinstance(unit, TitleUnit):
            return self._measure_title(unit)
        return self._measure_row(unit)

    def _measure_title(self, unit: TitleUnit) -> float:
        style = self.design_font.text_style("title")
        layout = self.metrics.layout_text(unit.section.section_title, style, self.content_width)
        return self.design_font.section_spacing_pt + layout.height + self.title_rule_gap

    def _measure_row(self, unit: RowUnit) -> float:
        section = unit.section
        height = self.row_padding
        for role, text in row_text_blocks(section.section_type, unit.row, section.display_setting):
            width = self.content_width
            if role == BULLET:
                width = max(1.0, width - self.bullet_indent)
            layout = self.metrics.layout_text(text, self.design_font.text_style(role), width)
            height += layout.height
        logger.debug(f"Measured row {unit.key}: {height:.2f}pt")
        return height
