"""Tests for the page orchestrator and the whole-document pagination properties."""

import asyncio
import random
from unittest.mock import patch

import pytest

from cvflow.engine.measurement import MeasurementCache, TableMeasurer
from cvflow.engine.page_engine import PageConfig
from cvflow.engine.page_orchestrator import PageOrchestrator, apaginate, paginate, _check_progress
from cvflow.engine.pagination_engine import Cursor, build_page
from cvflow.engine.geometry import Margins, Size
from cvflow.exceptions import MalformedDocumentError, PaginationError
from cvflow.models.section import Section, SectionType, validate_document

CAPACITY = 100


def random_document(seed):
    """Sections with random row counts and heights; singletons get one row."""
    rng = random.Random(seed)
    kinds = list(SectionType)
    sections, row_heights, title_heights = [], [], {}
    for index in range(rng.randint(1, 7)):
        kind = rng.choice(kinds)
        count = 1 if kind.is_singleton else rng.randint(1, 6)
        sections.append(Section(kind, f"{kind.value} {index}", [f"{index}:{i}" for i in range(count)]))
        row_heights.append([rng.randint(5, 70) for _ in range(count)])
        title_heights[index] = rng.randint(0, 25)
    # Occasionally a row taller than the page
    if rng.random() < 0.3:
        row_heights[-1][-1] = CAPACITY + rng.randint(1, 50)
    return sections, TableMeasurer(row_heights=row_heights, title_heights=title_heights)


def rows_by_section(pages):
    collected = {}
    for page in pages:
        for part in page.sections:
            collected.setdefault(part.source_index, []).extend(part.rows)
    return collected


def boundaries(pages):
    return [(page.start_cursor, page.end_cursor) for page in pages]


class TestScenarios:

    def test_header_and_experience_make_three_pages(self, scenario_sections, scenario_measurer):
        pages = list(paginate(scenario_sections, CAPACITY, scenario_measurer))

        assert [page.content_height for page in pages] == [90, 30, 80]
        assert [page.number for page in pages] == [1, 2, 3]
        assert [[p.source_index for p in page.sections] for page in pages] == [[0, 1], [1], [1]]
        assert [page.sections[-1].show_title for page in pages] == [True, False, False]

    def test_single_oversized_row_makes_one_page(self, section_factory):
        sections = [section_factory(SectionType.SKILL, 1, title="")]

        pages = list(paginate(sections, CAPACITY, TableMeasurer(row_heights=[[150]])))

        assert len(pages) == 1
        assert pages[0].overflows

    def test_empty_document_has_no_pages(self):
        assert list(paginate([], CAPACITY, TableMeasurer(row_heights=[]))) == []

    def test_each_unit_is_measured_once(self, scenario_sections, scenario_measurer):
        list(paginate(scenario_sections, CAPACITY, scenario_measurer))

        assert len(scenario_measurer.calls) == len(set(scenario_measurer.calls)) == 5


@pytest.mark.parametrize("seed", range(25))
class TestPaginationProperties:

    def test_completeness(self, seed):
        sections, measurer = random_document(seed)

        collected = rows_by_section(paginate(sections, CAPACITY, measurer))

        assert collected == {index: section.rows for index, section in enumerate(sections)}

    def test_minimum_occupancy_and_capacity(self, seed):
        sections, measurer = random_document(seed)

        for page in paginate(sections, CAPACITY, measurer):
            assert page.row_count >= 1
            assert page.content_height <= page.capacity or page.row_count == 1
            assert sum(entry.height for entry in page.ledger) == pytest.approx(page.content_height)

    def test_titles_only_with_first_row(self, seed):
        sections, measurer = random_document(seed)

        titles = []
        for page in paginate(sections, CAPACITY, measurer):
            for part in page.sections:
                assert part.show_title == (part.first_row_index == 0 and part.has_title)
                if part.show_title:
                    titles.append(part.source_index)
        assert len(titles) == len(set(titles))

    def test_determinism(self, seed):
        sections, measurer = random_document(seed)

        first = boundaries(paginate(sections, CAPACITY, measurer))
        second = boundaries(paginate(sections, CAPACITY, measurer))

        assert first == second

    def test_idempotent_restart(self, seed):
        sections, measurer = random_document(seed)
        full = list(paginate(sections, CAPACITY, measurer))

        for index, page in enumerate(full):
            resumed = list(paginate(sections, CAPACITY, measurer, start=page.end_cursor)) \
                if not page.end_cursor.is_terminal(sections) else []
            assert boundaries(resumed) == boundaries(full[index + 1:])

    def test_orchestrator_matches_single_page_calls(self, seed):
        sections, measurer = random_document(seed)
        pages = list(paginate(sections, CAPACITY, measurer))

        cursor = Cursor(0, 0)
        for page in pages:
            result = build_page(sections, cursor, CAPACITY, measurer)
            assert result.next_cursor == page.end_cursor
            cursor = result.next_cursor
        assert cursor.is_terminal(sections)


class TestPaginateValidation:

    def test_malformed_document_fails_before_first_page(self, section_factory):
        sections = [section_factory(SectionType.SUMMARY, 2)]

        with pytest.raises(MalformedDocumentError):
            paginate(sections, CAPACITY, TableMeasurer(row_heights=[[1, 1]]))

    def test_invalid_capacity_fails_before_first_page(self, scenario_sections, scenario_measurer):
        with pytest.raises(MalformedDocumentError):
            paginate(scenario_sections, 0, scenario_measurer)

    def test_progress_assertion(self):
        with pytest.raises(PaginationError):
            _check_progress(Cursor(1, 2), Cursor(1, 2))
        _check_progress(Cursor(1, 2), Cursor(2, 0))

    def test_first_page_number_is_configurable(self, scenario_sections, scenario_measurer):
        pages = list(paginate(scenario_sections, CAPACITY, scenario_measurer, start=Cursor(1, 1), first_page_number=2))

        assert [page.number for page in pages] == [2, 3]

    def test_shared_cache_is_reused(self, scenario_sections, scenario_measurer):
        cache = MeasurementCache(scenario_measurer)

        list(paginate(scenario_sections, CAPACITY, cache))
        list(paginate(scenario_sections, CAPACITY, cache))

        assert cache.misses == 5
        assert len(scenario_measurer.calls) == 5

    def test_document_is_validated_once_per_pass(self, scenario_sections, scenario_measurer):
        with patch("cvflow.engine.page_orchestrator.validate_document", wraps=validate_document) as pass_check, \
                patch("cvflow.engine.pagination_engine.validate_document", wraps=validate_document) as page_check:
            pages = list(paginate(scenario_sections, CAPACITY, scenario_measurer))

        assert len(pages) == 3
        assert pass_check.call_count == 1
        assert page_check.call_count == 0

    def test_async_document_is_validated_once_per_pass(self, scenario_sections, scenario_measurer):
        async def collect():
            return [page async for page in apaginate(scenario_sections, CAPACITY, scenario_measurer)]

        with patch("cvflow.engine.page_orchestrator.validate_document", wraps=validate_document) as pass_check, \
                patch("cvflow.engine.pagination_engine.validate_document", wraps=validate_document) as page_check:
            pages = asyncio.run(collect())

        assert len(pages) == 3
        assert pass_check.call_count == 1
        assert page_check.call_count == 0

    def test_single_page_call_still_validates(self, scenario_sections, scenario_measurer):
        with patch("cvflow.engine.pagination_engine.validate_document", wraps=validate_document) as page_check:
            build_page(scenario_sections, Cursor(0, 0), CAPACITY, scenario_measurer)

        assert page_check.call_count == 1


class TestPageOrchestrator:

    def test_explicit_capacity_and_oracle(self, scenario_sections, scenario_measurer):
        orchestrator = PageOrchestrator(oracle=scenario_measurer, capacity=CAPACITY)

        pages = orchestrator.paginate_all(scenario_sections)

        assert len(pages) == 3

    def test_capacity_from_page_config(self, scenario_sections, scenario_measurer):
        config = PageConfig(page_size=Size(200, 150), base_margins=Margins.uniform(25))

        orchestrator = PageOrchestrator(page_config=config, oracle=scenario_measurer)

        assert orchestrator.capacity == 100
        assert len(orchestrator.paginate_all(scenario_sections)) == 3

    def test_page_config_without_room_is_rejected(self):
        config = PageConfig(page_size=Size(200, 100), base_margins=Margins.uniform(60))

        with pytest.raises(MalformedDocumentError):
            PageOrchestrator(page_config=config, oracle=TableMeasurer(row_heights=[]))

    def test_default_oracle_uses_font_metrics(self, section_factory):
        sections = [
            section_factory(SectionType.HEADER, [{"name": "Ada Example", "title": "Engineer"}]),
            section_factory(SectionType.SKILL, ["Python", "SQL", "Power BI"]),
        ]

        pages = PageOrchestrator().paginate_all(sections)

        assert len(pages) == 1
        assert 0 < pages[0].content_height < pages[0].capacity

    def test_async_pagination_matches_sync(self, scenario_sections, scenario_measurer):
        async def oracle(unit):
            await asyncio.sleep(0)
            return scenario_measurer.measure(unit)

        async def collect():
            return [page async for page in apaginate(scenario_sections, CAPACITY, oracle)]

        pages = asyncio.run(collect())

        assert [page.content_height for page in pages] == [90, 30, 80]

    def test_async_orchestrator(self, scenario_sections, scenario_measurer):
        orchestrator = PageOrchestrator(oracle=scenario_measurer, capacity=CAPACITY)

        pages = asyncio.run(orchestrator.apaginate_all(scenario_sections))

        assert [page.end_cursor for page in pages] == [Cursor(1, 1), Cursor(1, 2), Cursor(2, 0)]
