"""
Pytest configuration for cvflow
"""

import pytest
import logging
import sys
import json

from cvflow.models.section import Section, SectionType
from cvflow.engine.measurement import TableMeasurer


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid handler leaks between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


def make_section(section_type, rows, title=None, **kwargs):
    """Section with rows given as a count or a list."""
    if isinstance(rows, int):
        rows = [f"{section_type.value}-row-{i}" for i in range(rows)]
    if title is None:
        title = "" if section_type is SectionType.HEADER else section_type.value.title()
    return Section(section_type=section_type, section_title=title, rows=list(rows), **kwargs)


@pytest.fixture
def section_factory():
    return make_section


@pytest.fixture
def scenario_sections():
    """Header (one row) followed by a three-row experience section."""
    return [
        make_section(SectionType.HEADER, 1),
        make_section(SectionType.EXPERIENCE, 3, title="Experience"),
    ]


@pytest.fixture
def scenario_measurer():
    """Header 40; experience title 20 and rows 30, 30, 80."""
    return TableMeasurer(row_heights=[[40], [30, 30, 80]], title_heights={1: 20})


@pytest.fixture
def sample_document_dict():
    """A small résumé in the editor's JSON format."""
    return {
        "designFont": {
            "pageMargin": 1,
            "sectionSpacing": 1,
            "fontSize": "sm",
            "fontStyle": 0,
            "lineHeight": 1,
            "primaryColor": "orange-700",
        },
        "sections": [
            {
                "sectionType": 0,
                "sectionTitle": "",
                "data": {
                    "content": {
                        "name": "Ada Example",
                        "title": "Data Engineer",
                        "phone": "+62 812 0000 0000",
                        "email": "ada@example.org",
                        "location": "Waikabubak, Indonesia",
                    },
                    "displaySetting": {"nameUppercase": True, "showPhone": False},
                },
            },
            {
                "sectionType": "Summary",
                "sectionTitle": "Summary",
                "data": {"rows": [{"text": "Builds data pipelines and reporting tools for NGO programmes."}]},
            },
            {
                "sectionType": "Experience",
                "sectionTitle": "Experience",
                "data": {
                    "rows": [
                        {
                            "id": "opd-001",
                            "title": "Operation & Data Coordinator",
                            "companyName": "Save the Children Indonesia",
                            "companyDescription": "Non-Governmental Organization (NGO)",
                            "location": "Waikabubak, Indonesia",
                            "period": "03/2018 - Present",
                            "bulletItems": [
                                "Design and maintain a data ecosystem integrating PostgreSQL and Power BI dashboards.",
                                "Architect ETL pipelines in Python to streamline data collection and reporting.",
                            ],
                        },
                        {
                            "id": "opd-003",
                            "title": "IT Web Dev Consultant",
                            "companyName": "Adriansiaril",
                            "location": "Remote",
                            "period": "07/2024 - 09/2024",
                            "bulletItems": ["Designed and developed a full-stack web application."],
                        },
                    ],
                },
            },
            {
                "sectionType": "Skill",
                "sectionTitle": "Skills",
                "data": {"rows": ["Python", "PostgreSQL", "Power BI"]},
                "column": 1,
            },
        ],
    }


@pytest.fixture
def sample_document_path(tmp_path, sample_document_dict):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps(sample_document_dict), encoding="utf-8")
    return path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    logging.raiseExceptions = False
