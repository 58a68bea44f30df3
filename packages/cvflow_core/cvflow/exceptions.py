"""
Exceptions for cvflow.

Handles the exception hierarchy raised while validating, measuring and
paginating a document, plus helpers for turning errors into reports.
"""

from typing import Optional, Any, Dict
import traceback


class CvflowError(Exception):
    """
    Base exception for all cvflow errors.

    Carries a message, the causing exception, an error code and details.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize cvflow error.

        Args:
            message: Error message
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}
        self.traceback = traceback.format_exc()

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        return {
            'message': self.message,
            'cause': str(self.cause) if self.cause else None,
            'error_code': self.error_code,
            'details': self.details,
            'traceback': self.traceback
        }

    def __str__(self) -> str:
        """String representation of exception."""
        return f"{self.__class__.__name__}: {self.message}"


class MalformedDocumentError(CvflowError):
    """
    Caller contract violation detected before pagination starts.

    Raised for sections without rows, singleton sections with more than one
    row, a start cursor outside the document, or a non-positive capacity.
    """

    def __init__(self, message: str, section_index: Optional[int] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize malformed document error.

        Args:
            message: Error message
            section_index: Index of the offending section, if any
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code or "malformed_document", details)
        self.section_index = section_index

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['section_index'] = self.section_index
        return info


class MeasurementError(CvflowError):
    """
    The measurement oracle failed or returned an unusable height.

    Fatal to the pagination pass: no partial page is returned.
    """

    def __init__(self, message: str, unit_key: Optional[tuple] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize measurement error.

        Args:
            message: Error message
            unit_key: Key of the unit being measured
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code or "measurement_failed", details)
        self.unit_key = unit_key

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['unit_key'] = self.unit_key
        return info


class PaginationError(CvflowError):
    """Pagination stopped making forward progress."""

    def __init__(self, message: str, cursor: Optional[Any] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code or "no_progress", details)
        self.cursor = cursor

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['cursor'] = str(self.cursor) if self.cursor is not None else None
        return info


class DocumentImportError(CvflowError):
    """
    Exception for document import errors.

    Raised when a JSON document cannot be read or mapped onto sections.
    """

    def __init__(self, message: str, file_path: Optional[str] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code or "import_failed", details)
        self.file_path = file_path

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info['file_path'] = self.file_path
        return info


def handle_exception(exception: CvflowError, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Collect error information for reporting.

    Args:
        exception: Exception to report
        context: Additional context (command, input file, ...)

    Returns:
        Dictionary with error information
    """
    error_info = exception.get_error_info()
    if context:
        error_info['context'] = context
    return error_info
