from .base_exporter import BaseExporter
from .pages_json_exporter import PagesJSONExporter, export_pages

__all__ = ["BaseExporter", "PagesJSONExporter", "export_pages"]
