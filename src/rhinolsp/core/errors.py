"""
Error types for catalog loading, configuration and completion.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class RhinoLspError(Exception):
    """Base exception for all rhinolsp errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class MalformedManifestError(RhinoLspError):
    """
    Raised when an action manifest lacks data a token builder needs.

    Examples:
    - Element targeting declared but no verb to render it with
    - Key that yields an empty action literal
    """

    pass


class UnresolvedContextError(RhinoLspError):
    """
    Raised when cursor text cannot be mapped to a known action.

    The dispatcher turns this into an empty completion list.
    """

    pass


class CatalogError(RhinoLspError):
    """
    Raised when a catalog document cannot be read.

    Examples:
    - Invalid JSON
    - Payload that is not a list of records
    - Record that fails model validation
    """

    pass


class ConfigError(RhinoLspError):
    """
    Raised when rhino.toml is invalid.

    Examples:
    - TOML syntax errors
    - Section that is not a table
    - Option with the wrong type
    """

    pass


@dataclass
class ErrorContext:
    """
    Where an error came from.

    Attributes:
        file: Path to the document that failed, if any
        key: Manifest key or config option involved, if any
        line: Line number (1-indexed) for document-level errors
    """

    file: Path | None = None
    key: str | None = None
    line: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "catalog/manifests.json:3 (SendKeys)"
        """
        location = str(self.file) if self.file else "<memory>"
        if self.line is not None:
            location += f":{self.line}"
        if self.key:
            location += f" ({self.key})"
        return location


def make_catalog_error(message: str, file: Path, key: str | None = None) -> CatalogError:
    """
    Helper to create a CatalogError with context.

    Args:
        message: Error description
        file: Catalog document path
        key: Optional manifest key

    Returns:
        CatalogError with context attached
    """
    return CatalogError(message, ErrorContext(file=file, key=key))
