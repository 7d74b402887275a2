"""Tests for the exception hierarchy."""

import pytest

from oiflow.exceptions import (ConfigError, DataSourceError,
                               DataValidationError, OIFlowError)


def test_oiflow_error_is_base_exception() -> None:
    """OIFlowError should be catchable as Exception."""
    with pytest.raises(Exception):
        raise OIFlowError("test error")


def test_config_error_inherits_from_oiflow_error() -> None:
    """ConfigError should be catchable as OIFlowError."""
    with pytest.raises(OIFlowError):
        raise ConfigError("invalid config")


def test_data_source_error_inherits_from_oiflow_error() -> None:
    """DataSourceError should be catchable as OIFlowError."""
    with pytest.raises(OIFlowError):
        raise DataSourceError("load failed")


def test_data_validation_error_inherits_from_oiflow_error() -> None:
    """DataValidationError should be catchable as OIFlowError."""
    with pytest.raises(OIFlowError):
        raise DataValidationError("bad period")


def test_exception_messages_preserved() -> None:
    """Exception messages should be accessible via str()."""
    msg = "detailed error message"
    err = DataSourceError(msg)
    assert str(err) == msg
