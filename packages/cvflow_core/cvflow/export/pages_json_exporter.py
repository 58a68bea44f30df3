"""

JSON exporter for pagination results.

Each page is serialized with its number, start/end cursors, content height
and the partial sections placed on it. The height ledger is included when
the ``include_ledger`` option is set.

"""

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from ..version import __version__
from .base_exporter import BaseExporter


class PagesJSONExporter(BaseExporter):
    """
    Exports pages to JSON.

    Options:
        include_ledger: add per-unit offsets and heights to each page
        indent: JSON indentation (default 2)
    """

    def __init__(self, pages: Sequence, output_path: Optional[str] = None,
                 export_options: Optional[Dict[str, Any]] = None):
        super().__init__(pages, output_path, export_options)

    def export(self) -> Dict[str, Any]:
        """Build the JSON-ready structure."""
        capacity = self.pages[0].capacity if self.pages else None
        return {
            "version": __version__,
            "format": "cvflow_pages",
            "metadata": {
                "total_pages": len(self.pages),
                "capacity": capacity,
            },
            "pages": [self._serialize_page(page) for page in self.pages],
        }

    def export_to_string(self) -> str:
        return json.dumps(self.export(), indent=self.get_export_option("indent", 2), ensure_ascii=False)

    def export_to_file(self, file_path: Optional[str] = None) -> bool:
        target = file_path or self.output_path
        if not target:
            raise ValueError("No output path given")
        path = Path(target)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.export_to_string(), encoding="utf-8")
        except OSError as exc:
            self.logger.error(f"Failed to write {path}: {exc}")
            return False
        self.logger.info(f"Exported {len(self.pages)} pages to {path}")
        return True

    def _serialize_page(self, page) -> Dict[str, Any]:
        result = {
            "number": page.number,
            "start": [page.start_cursor.section_index, page.start_cursor.row_index],
            "end": [page.end_cursor.section_index, page.end_cursor.row_index],
            "content_height": round(page.content_height, 3),
            "sections": [self._serialize_part(part) for part in page.sections],
        }
        if page.overflows:
            result["overflows"] = True
        if self.get_export_option("include_ledger", False):
            result["ledger"] = [
                {
                    "kind": entry.kind,
                    "cursor": [entry.cursor.section_index, entry.cursor.row_index],
                    "offset": round(entry.offset, 3),
                    "height": round(entry.height, 3),
                }
                for entry in page.ledger
            ]
        return result

    def _serialize_part(self, part) -> Dict[str, Any]:
        return {
            "source_index": part.source_index,
            "section_type": part.section_type.value,
            "section_title": part.section_title,
            "show_title": part.show_title,
            "first_row_index": part.first_row_index,
            "column": part.column,
            "display_setting": self._simplify_value(part.display_setting),
            "rows": [self._simplify_value(row) for row in part.rows],
        }

    def _simplify_value(self, value: Any) -> Any:
        """Turns rows and settings into JSON-compatible values."""
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        if is_dataclass(value) and not isinstance(value, type):
            return self._simplify_value(asdict(value))
        if isinstance(value, Mapping):
            return {str(k): self._simplify_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._simplify_value(v) for v in value]
        return str(value)


def export_pages(pages: Sequence, output_path: Path, include_ledger: bool = False) -> bool:
    exporter = PagesJSONExporter(pages, str(output_path), {"include_ledger": include_ledger})
    return exporter.export_to_file()
