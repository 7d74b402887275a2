"""Technical indicators over numeric series."""

from __future__ import annotations

from typing import Sequence

from oiflow.exceptions import DataValidationError


def moving_average(values: Sequence[float | None], period: int) -> list[float | None]:
    """Calculate a trailing simple moving average.

    The first ``period - 1`` positions have no full window and are None.
    Missing values inside a window count as 0 but still occupy a slot, so
    windows straddling gaps are biased towards zero rather than skipped.

    :param values: Input series; None marks a missing value.
    :param period: Window length, at least 1.
    :returns: Series of the same length as ``values``.
    :raises DataValidationError: If ``period`` is less than 1.
    """
    if period < 1:
        raise DataValidationError(f"Moving average period must be >= 1, got {period}")

    output: list[float | None] = []
    for i in range(len(values)):
        if i < period - 1:
            output.append(None)
            continue
        window = values[i - period + 1 : i + 1]
        output.append(sum(v or 0.0 for v in window) / period)
    return output


__all__ = ["moving_average"]
