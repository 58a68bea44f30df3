"""
Base exporter for paginated documents.

Provides common functionality for all exporters.
"""

from typing import Dict, Any, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class BaseExporter:
    """
    Base class for all exporters.
    """

    def __init__(self, pages: Sequence, output_path: Optional[str] = None,
                 export_options: Optional[Dict[str, Any]] = None):
        """
        Initialize base exporter.

        Args:
            pages: Pages to export
            output_path: Output path for export file
            export_options: Export options
        """
        self.pages = list(pages)
        self.output_path = output_path
        self.export_options = export_options or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_export_option(self, key: str, default: Any = None) -> Any:
        """
        Get export option value.

        Args:
            key: Option key
            default: Default value if key not found

        Returns:
            Option value
        """
        return self.export_options.get(key, default)

    def export_to_string(self) -> str:
        """
        Export pages to string.

        Returns:
            Exported content as string
        """
        raise NotImplementedError("Subclasses must implement export_to_string")

    def export_to_file(self, file_path: Optional[str] = None) -> bool:
        """
        Export pages to file.

        Args:
            file_path: Output file path (uses output_path if not provided)

        Returns:
            True if successful, False otherwise
        """
        raise NotImplementedError("Subclasses must implement export_to_file")
