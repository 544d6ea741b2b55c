"""Presswork error hierarchy.

All presswork-specific errors inherit from PressworkError for easy catching.
Errors raised by injected collaborators (filesystem, discovery, renderer)
are never wrapped in these types.
"""


class PressworkError(Exception):
    """Base error for all presswork operations."""


class ConfigError(PressworkError):
    """Invalid or missing configuration (presswork.yaml, site.json)."""


class DiscoveryError(PressworkError):
    """A content directory could not be scanned."""


class LoadError(PressworkError):
    """A content descriptor is not valid JSON or lacks required fields."""


class TemplateError(PressworkError):
    """A template identifier is missing or unusable."""


class WriteError(PressworkError):
    """An output file would be written outside the output directory."""
