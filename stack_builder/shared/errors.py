"""Shared exception definitions for the application."""

from typing import Dict, Optional


class StackBuilderError(Exception):
    """Base exception for Stack Builder errors."""

    pass


class ConfigurationError(StackBuilderError):
    """Raised when configuration is missing or invalid."""

    pass


class CatalogError(StackBuilderError):
    """Raised when an option catalog is malformed (duplicate ids, etc.)."""

    pass


class WorkflowError(StackBuilderError):
    """Raised when a flow operation is requested from the wrong step."""

    pass


class ValidationError(StackBuilderError):
    """Raised when a contact request fails validation."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.field_errors: Dict[str, str] = field_errors or {}
