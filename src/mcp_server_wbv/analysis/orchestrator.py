"""Triaxial vibration analysis.

Runs the unweighted spectrum, the frequency weighting and the dose metrics
for each axis, then combines the per-axis VDVs.  One generic per-axis
operation (:func:`analyze_axis`) is applied to x, y and z.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcp_server_wbv.analysis import preprocessing
from mcp_server_wbv.analysis.dose import DoseResult, compute_dose, rms, vdv_total
from mcp_server_wbv.analysis.filtering import apply_weighting, weight_spectrum
from mcp_server_wbv.analysis.recording import AXES, TriaxialRecording
from mcp_server_wbv.analysis.spectral import Spectrum, forward_transform, inverse_transform
from mcp_server_wbv.analysis.weighting import FrequencyWeighting
from mcp_server_wbv.errors import AnalysisBusyError, MalformedInputError

logger = logging.getLogger(__name__)


class AnalysisState(str, Enum):
    IDLE = "idle"
    COMPUTING = "computing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class AxisStatistics:
    """Unweighted per-axis summary (``None`` fields for an empty axis)."""

    n_samples: int
    minimum: float | None
    maximum: float | None
    rms: float | None
    peak_frequency_hz: float | None

    def to_dict(self) -> dict:
        return {
            "n_samples": self.n_samples,
            "min": self.minimum,
            "max": self.maximum,
            "rms": self.rms,
            "peak_frequency_hz": self.peak_frequency_hz,
        }


@dataclass(frozen=True, eq=False)
class AxisAnalysis:
    axis: str
    spectrum: Spectrum
    weighted: NDArray[np.floating] | None
    dose: DoseResult | None
    statistics: AxisStatistics
    weighted_spectrum: Spectrum | None = None

    def to_dict(self, include_arrays: bool = False) -> dict:
        out: dict = {
            "axis": self.axis,
            "statistics": self.statistics.to_dict(),
            "dose": self.dose.to_dict() if self.dose is not None else None,
            "n_bins": self.spectrum.n_bins,
        }
        if include_arrays:
            out["magnitudes"] = self.spectrum.magnitudes.tolist()
            out["weighted_magnitudes"] = (
                self.weighted_spectrum.magnitudes.tolist() if self.weighted_spectrum is not None else None
            )
            out["weighted"] = self.weighted.tolist() if self.weighted is not None else None
        return out


@dataclass(frozen=True, eq=False)
class TriaxialResult:
    """Outcome of one analysis request.

    Attributes:
        request_id: Monotonic id; compare with :meth:`TriaxialAnalyzer.is_current`.
        sample_rate: Rate used for the analysis (Hz).
        weighting: Weighting applied before the dose metrics.
        axes: Per-axis results keyed by ``"x"``, ``"y"``, ``"z"``.
        vdv_total: Fourth-power vector sum of the axis VDVs, or ``None``.
    """

    request_id: int
    sample_rate: float
    weighting: FrequencyWeighting
    axes: dict[str, AxisAnalysis] = field(default_factory=dict)
    vdv_total: float | None = None

    @property
    def frequencies(self) -> NDArray[np.floating]:
        return self.axes["x"].spectrum.frequencies

    def to_dict(self, include_arrays: bool = False) -> dict:
        out: dict = {
            "request_id": self.request_id,
            "sample_rate_hz": self.sample_rate,
            "weighting": self.weighting.value,
            "axes": {name: a.to_dict(include_arrays) for name, a in self.axes.items()},
            "vdv_total": self.vdv_total,
        }
        if include_arrays:
            out["frequencies_hz"] = self.frequencies.tolist()
        return out


def _statistics(x: NDArray[np.floating], spectrum: Spectrum) -> AxisStatistics:
    if x.size == 0:
        return AxisStatistics(0, None, None, None, None)
    return AxisStatistics(
        n_samples=int(x.size),
        minimum=float(np.min(x)),
        maximum=float(np.max(x)),
        rms=rms(x),
        peak_frequency_hz=spectrum.peak_frequency(),
    )


def analyze_axis(
    axis: str,
    samples: ArrayLike,
    sample_rate: float,
    weighting: FrequencyWeighting | str = FrequencyWeighting.NONE,
    mtvv_window_s: float = 1.0,
) -> AxisAnalysis:
    """Analyse one axis: spectrum, optional weighting and dose metrics.

    The forward transform runs once; the weighted spectrum is derived from
    it and inverted to give the weighted series.

    An invalid sample rate is not an error: the spectrum is empty, the
    weighted series is the input unchanged and the weighted spectrum and
    dose are ``None``.

    Args:
        axis: Axis label carried into the result.
        samples: Raw acceleration samples.
        sample_rate: Sampling frequency in Hz.
        weighting: Weighting for the dose metrics; ``none`` skips them.
        mtvv_window_s: MTVV running-RMS window in seconds.

    Returns:
        :class:`AxisAnalysis` for the axis.

    Raises:
        TransformError: If the samples cannot be transformed.
    """
    weighting = FrequencyWeighting.parse(weighting)
    x = np.array(samples, dtype=np.float64)
    rate_ok = math.isfinite(sample_rate) and sample_rate > 0

    spectrum = forward_transform(x, sample_rate) if rate_ok else Spectrum.empty()

    weighted_spectrum = None
    weighted = None
    dose = None
    if weighting is not FrequencyWeighting.NONE:
        if rate_ok:
            weighted_spectrum = weight_spectrum(spectrum, weighting)
            weighted = inverse_transform(weighted_spectrum, x.size)
            if x.size > 0:
                dose = compute_dose(weighted, sample_rate, mtvv_window_s)
        else:
            weighted = apply_weighting(x, sample_rate, weighting)

    return AxisAnalysis(
        axis=axis,
        spectrum=spectrum,
        weighted=weighted,
        dose=dose,
        statistics=_statistics(x, spectrum),
        weighted_spectrum=weighted_spectrum,
    )


class TriaxialAnalyzer:
    """Runs triaxial analyses one at a time.

    State moves ``idle → computing → ready`` (or ``failed``).  A second
    request while one is computing is rejected with
    :class:`AnalysisBusyError`.  Inputs are copied when a request is
    accepted, so later mutation by the caller cannot affect it.
    :meth:`submit` runs requests on a single worker thread owned by the
    analyzer; :meth:`close` (or leaving a ``with`` block) stops it.

    Args:
        weighting: Default weighting for requests that do not pass one.
        mtvv_window_s: MTVV window in seconds.
        parallel: Compute the three axes on a thread pool.
    """

    def __init__(
        self,
        weighting: FrequencyWeighting | str = FrequencyWeighting.WB,
        mtvv_window_s: float = 1.0,
        parallel: bool = True,
    ) -> None:
        self.weighting = FrequencyWeighting.parse(weighting)
        self.mtvv_window_s = mtvv_window_s
        self.parallel = parallel
        self._lock = threading.Lock()
        self._state = AnalysisState.IDLE
        self._ids = itertools.count(1)
        self._latest_id = 0
        self._last_error: BaseException | None = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="wbv-analysis")

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def last_error(self) -> BaseException | None:
        return self._last_error

    def is_current(self, result: TriaxialResult) -> bool:
        """True if no newer request was accepted after ``result``'s."""
        return result.request_id == self._latest_id

    # -- request lifecycle -------------------------------------------------

    def _accept(
        self,
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
        sample_rate: float,
        weighting: FrequencyWeighting | str | None,
    ) -> tuple[int, dict[str, NDArray[np.floating]], float, FrequencyWeighting]:
        with self._lock:
            if self._state is AnalysisState.COMPUTING:
                raise AnalysisBusyError("An analysis is already in progress")
            kind = self.weighting if weighting is None else FrequencyWeighting.parse(weighting)
            data = {name: np.array(a, dtype=np.float64) for name, a in zip(AXES, (x, y, z))}
            not_1d = {name: a.ndim for name, a in data.items() if a.ndim != 1}
            if not_1d:
                self._state = AnalysisState.FAILED
                self._last_error = MalformedInputError(f"Axes must be 1-D series, got dimensions {not_1d}")
                raise self._last_error
            lengths = {name: len(a) for name, a in data.items()}
            if len(set(lengths.values())) != 1:
                self._state = AnalysisState.FAILED
                self._last_error = MalformedInputError(f"Axis lengths differ: {lengths}")
                raise self._last_error
            request_id = next(self._ids)
            self._latest_id = request_id
            self._state = AnalysisState.COMPUTING
            self._last_error = None
        return request_id, data, float(sample_rate), kind

    def _run(
        self,
        request_id: int,
        data: dict[str, NDArray[np.floating]],
        sample_rate: float,
        kind: FrequencyWeighting,
    ) -> TriaxialResult:
        try:
            if self.parallel:
                with ThreadPoolExecutor(max_workers=len(AXES), thread_name_prefix="wbv-axis") as pool:
                    futures = {
                        name: pool.submit(analyze_axis, name, arr, sample_rate, kind, self.mtvv_window_s)
                        for name, arr in data.items()
                    }
                    axes = {name: f.result() for name, f in futures.items()}
            else:
                axes = {
                    name: analyze_axis(name, arr, sample_rate, kind, self.mtvv_window_s)
                    for name, arr in data.items()
                }
        except Exception as exc:
            with self._lock:
                self._state = AnalysisState.FAILED
                self._last_error = exc
            logger.error("Analysis request %d failed: %s", request_id, exc)
            raise

        doses = [axes[name].dose for name in AXES]
        total = None
        if all(d is not None for d in doses):
            total = vdv_total(*(d.vdv for d in doses))  # type: ignore[union-attr]

        result = TriaxialResult(
            request_id=request_id,
            sample_rate=sample_rate,
            weighting=kind,
            axes=axes,
            vdv_total=total,
        )
        with self._lock:
            self._state = AnalysisState.READY
        logger.info(
            "Analysis request %d ready: %d samples/axis at %.3f Hz, weighting %s",
            request_id, len(data["x"]), sample_rate, kind.value,
        )
        return result

    # -- public entry points -----------------------------------------------

    def analyze(
        self,
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
        sample_rate: float,
        weighting: FrequencyWeighting | str | None = None,
    ) -> TriaxialResult:
        """Analyse three axes synchronously.

        Args:
            x: X-axis acceleration samples.
            y: Y-axis acceleration samples.
            z: Z-axis acceleration samples.
            sample_rate: Average sample rate in Hz.
            weighting: Overrides the analyzer's default weighting.

        Returns:
            :class:`TriaxialResult`.

        Raises:
            AnalysisBusyError: If another request is computing.
            MalformedInputError: If an axis is not 1-D or the axes differ in length.
            TransformError: If an axis cannot be transformed.
        """
        return self._run(*self._accept(x, y, z, sample_rate, weighting))

    def submit(
        self,
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
        sample_rate: float,
        weighting: FrequencyWeighting | str | None = None,
    ) -> Future[TriaxialResult]:
        """Start an analysis on the analyzer's worker thread.

        The busy check and the input copy happen before this returns, so
        errors from them are raised here rather than through the future.
        """
        accepted = self._accept(x, y, z, sample_rate, weighting)
        try:
            future = self._executor.submit(self._run, *accepted)
        except RuntimeError:
            with self._lock:
                self._state = AnalysisState.IDLE
            raise
        future.add_done_callback(self._release_if_cancelled)
        return future

    def _release_if_cancelled(self, future: Future[TriaxialResult]) -> None:
        if future.cancelled():
            with self._lock:
                self._state = AnalysisState.IDLE

    def close(self) -> None:
        """Wait for a submitted analysis to finish and stop the worker thread."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> TriaxialAnalyzer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def analyze_async(
        self,
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
        sample_rate: float,
        weighting: FrequencyWeighting | str | None = None,
    ) -> TriaxialResult:
        """Awaitable form of :meth:`submit`."""
        return await asyncio.wrap_future(self.submit(x, y, z, sample_rate, weighting))

    def analyze_recording(
        self,
        recording: TriaxialRecording,
        nominal_rate: float | None = None,
        remove_gravity: bool = False,
        weighting: FrequencyWeighting | str | None = None,
        gravity_method: str = "constant",
    ) -> TriaxialResult:
        """Analyse a timestamped recording at its effective sample rate.

        Args:
            recording: Captured samples.
            nominal_rate: Fallback rate when timestamps cannot give one.
            remove_gravity: Remove the static gravity component from every
                axis first.
            weighting: Overrides the analyzer's default weighting.
            gravity_method: ``"constant"`` or ``"linear"`` (see
                :func:`~mcp_server_wbv.analysis.preprocessing.remove_gravity`).
        """
        rate = recording.effective_sample_rate(nominal_rate)
        axes = [recording.axis(name) for name in AXES]
        if remove_gravity:
            axes = [preprocessing.remove_gravity(a, gravity_method) for a in axes]  # type: ignore[arg-type]
        return self.analyze(*axes, sample_rate=rate if rate is not None else 0.0, weighting=weighting)
