"""
JSON importer for résumé documents.

Reads the editor's document format into DesignFont and Section models:

    {
        "designFont": {"pageMargin": 0, "sectionSpacing": 1, ...},
        "sections": [
            {
                "sectionType": "Experience",
                "sectionTitle": "Work Experience",
                "data": {"rows": [...], "displaySetting": {...}},
                "column": 0
            }
        ]
    }

``sectionType`` may be an ordinal or a name. Singleton sections may give
their body under ``data.content`` instead of a one-element row list.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional
from pathlib import Path

from ..exceptions import DocumentImportError
from ..models.contents import content_from_dict
from ..models.section import Section, SectionType
from ..styles.design_font import DesignFont

logger = logging.getLogger(__name__)


class DocumentJSONImporter:
    """Importer for résumé documents stored as JSON."""

    def __init__(self, json_data: Optional[Dict[str, Any]] = None, json_path: Optional[Path] = None,
                 typed_rows: bool = True):
        """
        Initialize document importer.

        Args:
            json_data: Parsed JSON document; takes precedence over json_path
            json_path: Path to a JSON document
            typed_rows: Map rows of known section types onto typed content records

        Raises:
            DocumentImportError: If the file cannot be read or is not a JSON object
        """
        self.json_path = Path(json_path) if json_path else None
        if json_data is not None:
            self.json_data = json_data
        elif self.json_path:
            try:
                with open(self.json_path, 'r', encoding='utf-8') as f:
                    self.json_data = json.load(f)
            except OSError as exc:
                raise DocumentImportError(f"Cannot read {self.json_path}: {exc}",
                                          file_path=str(self.json_path), cause=exc) from exc
            except json.JSONDecodeError as exc:
                raise DocumentImportError(f"Invalid JSON in {self.json_path}: {exc}",
                                          file_path=str(self.json_path), cause=exc) from exc
        else:
            raise ValueError("Either json_data or json_path must be given")

        if not isinstance(self.json_data, Mapping):
            raise DocumentImportError("Document JSON must be an object", file_path=self._path_str())
        self.typed_rows = typed_rows

    def _path_str(self) -> Optional[str]:
        return str(self.json_path) if self.json_path else None

    def _section_error(self, index: int, message: str, cause: Optional[Exception] = None) -> DocumentImportError:
        return DocumentImportError(f"Section {index}: {message}", file_path=self._path_str(),
                                   cause=cause, details={'section_index': index})

    def design_font(self) -> DesignFont:
        """Design settings of the document (defaults when absent)."""
        try:
            return DesignFont.from_dict(self.json_data.get('designFont'))
        except (AttributeError, TypeError, ValueError) as exc:
            raise DocumentImportError(f"Invalid designFont block: {exc}",
                                      file_path=self._path_str(), cause=exc) from exc

    def sections(self) -> List[Section]:
        """
        Sections of the document in reading order.

        Raises:
            DocumentImportError: If a section cannot be mapped onto the model
        """
        raw_sections = self.json_data.get('sections')
        if not isinstance(raw_sections, list):
            raise DocumentImportError("Document JSON has no 'sections' list", file_path=self._path_str())

        sections = [self._section_from_dict(index, raw) for index, raw in enumerate(raw_sections)]
        logger.debug(f"Imported {len(sections)} sections from {self._path_str() or 'data'}")
        return sections

    def _section_from_dict(self, index: int, raw: Any) -> Section:
        if not isinstance(raw, Mapping):
            raise self._section_error(index, "must be an object")
        try:
            section_type = SectionType.from_value(raw.get('sectionType'))
        except ValueError as exc:
            raise self._section_error(index, str(exc), exc) from exc

        data = raw.get('data') or {}
        if not isinstance(data, Mapping):
            raise self._section_error(index, f"data must be an object, got {type(data).__name__}")

        rows = data.get('rows', raw.get('rows'))
        if rows is None and 'content' in data:
            rows = [data['content']]
        if rows is None:
            rows = []
        if not isinstance(rows, list):
            raise self._section_error(index, "rows must be a list")
        if self.typed_rows:
            try:
                rows = [content_from_dict(section_type, row) for row in rows]
            except (AttributeError, TypeError, ValueError) as exc:
                raise self._section_error(index, f"invalid row: {exc}", exc) from exc

        display_setting = data.get('displaySetting', raw.get('displaySetting')) or {}
        if not isinstance(display_setting, Mapping):
            raise self._section_error(
                index, f"displaySetting must be an object, got {type(display_setting).__name__}"
            )

        column = raw.get('column', 0) or 0
        if isinstance(column, bool):
            raise self._section_error(index, f"column must be an integer, got {column!r}")
        try:
            column = int(column)
        except (TypeError, ValueError) as exc:
            raise self._section_error(index, f"column must be an integer, got {column!r}", exc) from exc

        return Section(
            section_type=section_type,
            section_title=raw.get('sectionTitle', '') or '',
            rows=rows,
            display_setting=dict(display_setting),
            column=column,
        )


def load_document(path: Path, typed_rows: bool = True):
    """Read a JSON document; returns ``(design_font, sections)``."""
    importer = DocumentJSONImporter(json_path=path, typed_rows=typed_rows)
    return importer.design_font(), importer.sections()
