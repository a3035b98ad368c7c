"""Discrete-time first-order low-pass filter."""

from __future__ import annotations

import math
from typing import Any

import numpy as np


class LowPassFilter:
    """First-order low-pass filter.

    The filter keeps one internal value and, for each input, updates it as
    ``value = alpha * value + (1 - alpha) * input``, with ``0 <= alpha <= 1``.
    Values may be scalars or numpy arrays.
    """

    def __init__(self, alpha: float = 0.0) -> None:
        self._alpha = float(alpha)
        self._check_alpha()
        self._value: Any = 0.0

    @classmethod
    def from_cutoff(cls, cutoff_hz: float, dt: float) -> "LowPassFilter":
        """Build a filter from a cutoff frequency in Hz and a fixed time step in seconds."""
        rc = 1.0 / (2.0 * math.pi * cutoff_hz)
        return cls(1.0 - dt / (dt + rc))

    @property
    def alpha(self) -> float:
        """The smoothing coefficient."""
        return self._alpha

    def _check_alpha(self) -> None:
        if self._alpha > 1 or self._alpha < 0:
            raise ValueError(f"invalid alpha {self._alpha}")

    def set_initial(self, value: Any = 0.0) -> None:
        """Set the internal value."""
        self._value = np.array(value, dtype=float) if np.ndim(value) else float(value)

    def filter(self, value: Any) -> Any:
        """Run one filtering step on ``value`` and return the filtered value."""
        if np.ndim(value):
            value = np.asarray(value, dtype=float)
        self._value = self._alpha * self._value + (1.0 - self._alpha) * value
        return self._value

    def filtered(self) -> Any:
        """Return the current filtered value."""
        return self._value