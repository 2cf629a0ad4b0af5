"""
Error types for QuantumCSS configuration loading and content scanning.
"""

from pathlib import Path


class QuantumError(Exception):
    """Base exception for all QuantumCSS errors."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending path if available."""
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigError(QuantumError):
    """
    Raised when a config file cannot be loaded.

    Examples:
    - File does not exist
    - Invalid JSON / YAML / TOML syntax
    - Document is not a mapping
    - Schema validation failure
    """

    pass


class ScanError(QuantumError):
    """
    Raised when the content pattern list itself is unusable.

    Unreadable individual files are never an error; they are skipped.
    """

    pass
