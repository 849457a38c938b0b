"""Exceptions raised while building the desired-state resource graph.

Failures that happen while applying the graph to GitHub are reported by
Pulumi itself and never pass through these classes.
"""


class InfrastructureError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(InfrastructureError):
    """A repository, label or catalog description is malformed or inconsistent."""


class FileAccessError(InfrastructureError, OSError):
    """A static content asset is missing or unreadable."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
