"""Order-flow analytics exception hierarchy.

All package-specific exceptions derive from :class:`OIFlowError` so callers can
catch every failure raised by this package uniformly.
"""

from __future__ import annotations


class OIFlowError(Exception):
    """Base class for order-flow analytics exceptions.

    Derived exceptions should extend this class so that callers can catch all
    package-specific errors uniformly.
    """


class ConfigError(OIFlowError):
    """Raised when configuration files or parameters are invalid."""


class DataSourceError(OIFlowError):
    """Raised when retrieving or parsing the raw document fails.

    This is the only fatal condition of the pipeline: no record store is built
    when it is raised, and it is never retried internally.
    """


class DataValidationError(OIFlowError):
    """Raised when a derivation receives arguments outside its domain.

    Named DataValidationError to avoid conflict with pydantic's ValidationError.
    """


__all__ = [
    "OIFlowError",
    "ConfigError",
    "DataSourceError",
    "DataValidationError",
]
