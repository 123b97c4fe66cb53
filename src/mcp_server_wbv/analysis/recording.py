"""Triaxial acceleration recording container."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcp_server_wbv.analysis.preprocessing import estimate_sample_rate
from mcp_server_wbv.errors import MalformedInputError

AXES = ("x", "y", "z")


@dataclass(frozen=True, eq=False)
class TriaxialRecording:
    """Timestamped x/y/z acceleration samples of equal length.

    Attributes:
        timestamps: Sample times in seconds, relative to capture start.
        x: X-axis acceleration (m/s²).
        y: Y-axis acceleration (m/s²).
        z: Z-axis acceleration (m/s²).
    """

    timestamps: NDArray[np.floating]
    x: NDArray[np.floating]
    y: NDArray[np.floating]
    z: NDArray[np.floating]

    @classmethod
    def from_arrays(
        cls,
        timestamps: ArrayLike,
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
    ) -> TriaxialRecording:
        """Build a recording from array-likes, copying and validating them.

        Raises:
            MalformedInputError: If the four arrays differ in length.
        """
        arrays = [np.array(a, dtype=np.float64).reshape(-1) for a in (timestamps, x, y, z)]
        lengths = {len(a) for a in arrays}
        if len(lengths) != 1:
            raise MalformedInputError(
                "timestamps/x/y/z must have equal lengths, got "
                + ", ".join(str(len(a)) for a in arrays)
            )
        return cls(*arrays)

    @property
    def n_samples(self) -> int:
        return len(self.timestamps)

    @property
    def duration_s(self) -> float:
        if self.n_samples < 2:
            return 0.0
        return float(self.timestamps[-1] - self.timestamps[0])

    def axis(self, name: str) -> NDArray[np.floating]:
        if name not in AXES:
            raise KeyError(f"Unknown axis '{name}', expected one of {AXES}")
        return getattr(self, name)

    def effective_sample_rate(self, fallback: float | None = None) -> float | None:
        """Average rate from the timestamps (see :func:`estimate_sample_rate`)."""
        return estimate_sample_rate(self.timestamps, fallback)

    def summary(self) -> dict:
        rate = self.effective_sample_rate()
        return {
            "n_samples": self.n_samples,
            "duration_s": round(self.duration_s, 6),
            "effective_sample_rate_hz": round(rate, 6) if rate is not None else None,
        }
