"""
Leakscan Exception Hierarchy

Only the fatal precondition (missing source root) and configuration errors
reach the user. Parsing errors are raised inside the parsing layer and turned
into ParseFailure values at the file boundary.

Example:
    try:
        extractor.extract(source)
    except JavaSyntaxError as e:
        outcome = ParseFailure(source.file_path, FailureReason.SYNTAX_ERROR, str(e))
"""

from typing import Any


class LeakScanError(Exception):
    """Base exception for all leakscan errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize leakscan error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Precondition / Configuration Errors
# ============================================================


class SourceRootNotFoundError(LeakScanError):
    """Configured source root does not exist. Aborts the whole run."""

    def __init__(self, source_root: str):
        super().__init__(f"Source directory not found: {source_root}", {"source_root": source_root})
        self.source_root = source_root


class InvalidConfigurationError(LeakScanError):
    """Invalid configuration."""

    pass


# ============================================================
# Parsing Errors
# ============================================================


class ParsingError(LeakScanError):
    """Source parsing failures."""

    pass


class UnsupportedLanguageError(ParsingError):
    """No tree-sitter grammar is available for the requested language."""

    pass


class JavaSyntaxError(ParsingError):
    """Tree-sitter produced a tree containing ERROR or MISSING nodes."""

    pass
