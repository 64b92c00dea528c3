"""Exceptions raised by the resolution pipeline."""


class LinkageError(Exception):
    """Base exception for all link resolution errors."""


class InvalidInputError(LinkageError, ValueError):
    """Raised when a batch is neither a synced space nor a resource array."""


class ConfigError(LinkageError, ValueError):
    """Raised when the YAML configuration fails schema validation."""
