"""CLI command implementations for the order-flow analytics engine.

Each command module provides configuration loading and validation for one
command of :mod:`oiflow.cli`.
"""

from oiflow.commands.report import load_report_config

__all__ = [
    "load_report_config",
]
