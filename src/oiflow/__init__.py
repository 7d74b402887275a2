"""Order-flow snapshot normalization and aggregation package root."""

from oiflow.exceptions import (ConfigError, DataSourceError,
                               DataValidationError, OIFlowError)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DataSourceError",
    "DataValidationError",
    "OIFlowError",
    "__version__",
]
