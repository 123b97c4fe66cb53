"""MCP Server for Whole-Body Vibration (WBV) analysis.

Provides tools for frequency weighting, spectral analysis and vibration
dose assessment (RMS, VDV, MTVV) of triaxial accelerometer recordings via
the Model Context Protocol.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Literal
from uuid import uuid4

import numpy as np
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from mcp_server_wbv.analysis import preprocessing
from mcp_server_wbv.analysis.dose import compute_dose, running_rms
from mcp_server_wbv.analysis.file_io import get_recording_file_info, load_axis_csv, load_triaxial_csv
from mcp_server_wbv.analysis.filtering import apply_weighting, weight_spectrum
from mcp_server_wbv.analysis.orchestrator import TriaxialAnalyzer
from mcp_server_wbv.analysis.recording import AXES, TriaxialRecording
from mcp_server_wbv.analysis.spectral import Spectrum, forward_transform
from mcp_server_wbv.analysis.test_signal import generate_test_recording
from mcp_server_wbv.analysis.weighting import FrequencyWeighting, gains
from mcp_server_wbv.config import Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------

mcp = FastMCP(
    "wbv",
    instructions=(
        "Whole-Body Vibration (WBV) analysis server. "
        "Applies ISO 2631 style frequency weightings (Wg, Wb, Wd) to "
        "accelerometer signals and computes the vibration dose metrics "
        "RMS, VDV and MTVV. "
        "IMPORTANT: Recordings and signals are kept in server memory and "
        "referenced by short IDs (rec_xxxx for triaxial recordings, "
        "sig_xxxx for single-axis signals).  Producer tools "
        "(generate_test_vibration, load_recording_from_file, "
        "load_signal_from_file, apply_frequency_weighting) return an ID.  "
        "Pass that ID to downstream tools instead of raw arrays.  "
        "Typical workflow: "
        "(1) load or generate a recording → get recording_id, "
        "(2) analyze_triaxial(recording_id=...) for per-axis doses and the "
        "combined VDV, "
        "(3) drill into one axis with compute_spectrum / compute_dose_metrics "
        "passing recording_id and axis."
    ),
)

_settings = Settings.from_env()
_analyzer = TriaxialAnalyzer(
    weighting=_settings.default_weighting,
    mtvv_window_s=_settings.mtvv_window_s,
    parallel=_settings.parallel_axes,
)


# ---------------------------------------------------------------------------
# Server-side data store (in memory, lost on restart)
# ---------------------------------------------------------------------------

_store: dict[str, dict] = {}


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:8]}"


def _store_signal(signal: np.ndarray | list, sampling_freq_hz: float, **metadata: object) -> str:
    """Store a single-axis signal, return a short reference ID."""
    sid = _new_id("sig")
    arr = np.array(signal, dtype=np.float64)
    _store[sid] = {
        "_type": "signal",
        "signal": arr,
        "sampling_freq_hz": float(sampling_freq_hz),
        **metadata,
    }
    return sid


def _store_recording(recording: TriaxialRecording, sampling_freq_hz: float, **metadata: object) -> str:
    """Store a triaxial recording, return a short reference ID."""
    rid = _new_id("rec")
    _store[rid] = {
        "_type": "recording",
        "recording": recording,
        "sampling_freq_hz": float(sampling_freq_hz),
        **metadata,
    }
    return rid


def _resolve_entry(data_id: str) -> dict:
    if data_id in _store:
        return _store[data_id]
    raise ValueError(f"Unknown data ID: {data_id}")


def _get_signal(
    signal_id: str | None = None,
    signal: list[float] | None = None,
    sampling_freq_hz: float | None = None,
    axis: str | None = None,
) -> tuple[np.ndarray, float]:
    """Resolve a single-axis signal from a store ID or a raw array.

    A recording ID needs ``axis`` to pick x, y or z.
    """
    if signal_id:
        entry = _resolve_entry(signal_id)
        if entry["_type"] == "recording":
            if axis not in AXES:
                raise ValueError(f"'{signal_id}' is a triaxial recording; pass axis as one of {AXES}")
            return entry["recording"].axis(axis).copy(), entry["sampling_freq_hz"]
        return entry["signal"].copy(), entry["sampling_freq_hz"]
    if signal is not None:
        if sampling_freq_hz is None:
            raise ValueError("sampling_freq_hz is required when passing a raw signal array")
        return np.array(signal, dtype=np.float64), sampling_freq_hz
    raise ValueError(
        "Provide either signal_id (a sig_ ID, or a rec_ ID plus axis) or a raw "
        "signal array with sampling_freq_hz."
    )


def _weighting(value: str | None) -> FrequencyWeighting:
    if value is None:
        return _settings.default_weighting
    return FrequencyWeighting.parse(value)


def _signal_summary(arr: np.ndarray, fs: float) -> dict:
    """Compact statistical summary of a signal (no raw data)."""
    if arr.size == 0:
        return {"n_samples": 0, "sampling_freq_hz": fs}
    return {
        "n_samples": len(arr),
        "duration_s": round(len(arr) / fs, 3) if fs > 0 else None,
        "sampling_freq_hz": fs,
        "rms": round(float(np.sqrt(np.mean(arr**2))), 6),
        "peak_amplitude": round(float(np.max(np.abs(arr))), 6),
        "mean": round(float(np.mean(arr)), 6),
    }


def _spectrum_summary(spectrum: Spectrum, max_freq_hz: float | None = None) -> dict:
    """Compact summary of a spectrum (no raw data)."""
    freqs, mags = spectrum.frequencies, spectrum.magnitudes
    if max_freq_hz is not None:
        mask = freqs <= max_freq_hz
        freqs, mags = freqs[mask], mags[mask]
    if freqs.size == 0:
        return {"n_bins": 0, "top_5_peaks": []}
    # DC is the gravity / offset component; leave it out of the peak list
    order = np.argsort(mags[1:])[::-1][:5] + 1
    top_peaks = [
        {"freq_hz": round(float(freqs[i]), 3), "amplitude": round(float(mags[i]), 6)}
        for i in order if mags[i] > 0
    ]
    return {
        "n_bins": len(freqs),
        "freq_range_hz": [round(float(freqs[0]), 3), round(float(freqs[-1]), 3)],
        "freq_resolution_hz": round(spectrum.resolution_hz, 6),
        "dc_amplitude": round(float(mags[0]), 6),
        "top_5_peaks": top_peaks,
    }


# ===================================================================
# RESOURCE: Weighting curves reference
# ===================================================================

_REFERENCE_FREQUENCIES = [0.5, 1.0, 2.0, 4.0, 5.0, 8.0, 12.5, 16.0, 31.5, 63.0, 80.0]


def _weighting_table() -> str:
    kinds = [FrequencyWeighting.WG, FrequencyWeighting.WB, FrequencyWeighting.WD]
    rows = ["| f (Hz) | " + " | ".join(k.value for k in kinds) + " |", "|---" * (len(kinds) + 1) + "|"]
    for f in _REFERENCE_FREQUENCIES:
        cells = [f"{float(gains([f], k)[0]):.3f}" for k in kinds]
        rows.append(f"| {f:g} | " + " | ".join(cells) + " |")
    return "\n".join(rows)


WEIGHTING_CURVES_REFERENCE = f"""# Whole-Body Vibration Weighting Reference

## Weightings
- **Wg**: motion-sickness oriented vertical weighting
  - 1 ≤ f < 4 Hz: 0.5·√f; 4 ≤ f ≤ 8 Hz: 1; f > 8 Hz: 8/f
- **Wb**: vertical whole-body weighting (seated/standing, railway and vehicle)
  - 1 ≤ f < 2 Hz: 0.4·√f; 2 ≤ f < 5 Hz: f/5; 5 ≤ f ≤ 16 Hz: 1; f > 16 Hz: 16/f
- **Wd**: horizontal whole-body weighting (x/y axes)
  - 1 ≤ f < 2 Hz: 1; f ≥ 2 Hz: 2/f
- Below 1 Hz every weighting is 0 (simplified curve, not standard compliant).
  DC (0 Hz) and "none" pass unchanged (gain 1).

## Gains at reference frequencies
{_weighting_table()}

## Dose metrics
- **RMS** = √(mean(a²)) of the weighted acceleration (m/s²)
- **VDV** = (Σ a⁴·Δt)^¼ (m/s^1.75); sensitive to shocks
- **MTVV** = max of the 1 s running RMS (m/s²)
- **Combined VDV** = (VDVx⁴ + VDVy⁴ + VDVz⁴)^¼
- If MTVV/RMS > 1.5 or VDV/(RMS·T^¼) > 1.75, the RMS method alone
  underestimates the effect of shocks; report VDV and MTVV as well.
"""


@mcp.resource("wbv://weighting-curves")
def weighting_curves_resource() -> str:
    """Reference for the Wg/Wb/Wd weighting curves and the WBV dose metrics."""
    return WEIGHTING_CURVES_REFERENCE


# ===================================================================
# TOOL 1: Frequency Weighting Gain
# ===================================================================

@mcp.tool()
def frequency_weighting_gain(
    frequencies_hz: Annotated[list[float], Field(description="Frequencies in Hz at which to evaluate the weighting")],
    weighting: Annotated[str, Field(description="Weighting curve: 'Wg', 'Wb', 'Wd' or 'none'", default="Wb")] = "Wb",
) -> str:
    """Evaluate a whole-body vibration weighting curve at the given frequencies."""
    kind = FrequencyWeighting.parse(weighting)
    values = gains(np.asarray(frequencies_hz, dtype=np.float64), kind)
    return json.dumps({
        "weighting": kind.value,
        "description": kind.description,
        "gains": [
            {"freq_hz": float(f), "gain": round(float(g), 6)}
            for f, g in zip(frequencies_hz, values)
        ],
    }, indent=2)


# ===================================================================
# TOOL 2: Generate Test Vibration
# ===================================================================

@mcp.tool()
def generate_test_vibration(
    duration_s: Annotated[float, Field(description="Recording duration in seconds", default=10.0)] = 10.0,
    sampling_freq_hz: Annotated[float, Field(description="Sampling frequency in Hz", default=100.0)] = 100.0,
    vertical_freq_hz: Annotated[float, Field(description="Frequency of the vertical (z) vibration in Hz", default=5.0)] = 5.0,
    vertical_amplitude: Annotated[float, Field(description="Peak vertical acceleration in m/s²", default=1.0)] = 1.0,
    lateral_freq_hz: Annotated[float, Field(description="Frequency of the lateral (x/y) vibration in Hz", default=1.5)] = 1.5,
    lateral_amplitude: Annotated[float, Field(description="Peak lateral acceleration in m/s²", default=0.3)] = 0.3,
    noise_level: Annotated[float, Field(description="Noise standard deviation in m/s²", default=0.02)] = 0.02,
    shock_times_s: Annotated[list[float] | None, Field(description="Times (s) of vertical shocks to inject. Omit for none", default=None)] = None,
    shock_amplitude: Annotated[float, Field(description="Peak shock acceleration in m/s²", default=5.0)] = 5.0,
    include_gravity: Annotated[bool, Field(description="Add 1 g to the z axis, as a raw accelerometer would", default=False)] = False,
) -> str:
    """Generate a synthetic triaxial vibration recording.

    Creates x/y/z acceleration with a lateral tone, a vertical tone, noise
    and optional shocks.  Useful for testing and demonstration of the
    weighting and dose tools.
    """
    shocks = [(t0, shock_amplitude) for t0 in shock_times_s or []]
    recording = generate_test_recording(
        duration_s=duration_s,
        fs=sampling_freq_hz,
        vertical_freq_hz=vertical_freq_hz,
        vertical_amplitude=vertical_amplitude,
        lateral_freq_hz=lateral_freq_hz,
        lateral_amplitude=lateral_amplitude,
        noise_std=noise_level,
        shocks=shocks,
        include_gravity=include_gravity,
    )
    rec_id = _store_recording(recording, sampling_freq_hz, source="synthetic")

    return json.dumps({
        "recording_id": rec_id,
        **recording.summary(),
        "axes": {name: _signal_summary(recording.axis(name), sampling_freq_hz) for name in AXES},
        "note": (
            f"Recording stored server-side as '{rec_id}'. "
            "Pass this recording_id to analyze_triaxial, or with an axis "
            "to compute_spectrum and compute_dose_metrics."
        ),
    }, indent=2)


# ===================================================================
# TOOL 3: Inspect Recording File
# ===================================================================

@mcp.tool()
def inspect_recording_file(
    file_path: Annotated[str, Field(description="Absolute path to the recording file (CSV, TSV or TXT)")],
) -> str:
    """Inspect a recording file without loading it.

    Returns size, header line, first data line and line count.  Use this
    before load_recording_from_file to check the column layout.
    """
    return json.dumps(get_recording_file_info(file_path), indent=2)


# ===================================================================
# TOOL 4: Load Recording from File
# ===================================================================

@mcp.tool()
def load_recording_from_file(
    file_path: Annotated[str, Field(description="Absolute path to a timestamp,x,y,z CSV/TSV file")],
    unit: Annotated[str, Field(description="Unit of the acceleration columns: 'm/s²' or 'g'", default="m/s²")] = "m/s²",
    nominal_rate_hz: Annotated[float | None, Field(description="Nominal sample rate, used only when the timestamps cannot give one", default=None)] = None,
    delimiter: Annotated[str | None, Field(description="Column delimiter. Auto-detected if null (comma for .csv, tab for .tsv/.txt)", default=None)] = None,
    max_rows: Annotated[int | None, Field(description="Max data rows to read (null = all)", default=None)] = None,
) -> str:
    """Load a timestamped triaxial acceleration recording.

    The effective sample rate is estimated from the timestamps as
    (n - 1) / duration, since mobile sensors rarely deliver the nominal
    rate exactly.
    """
    recording = load_triaxial_csv(file_path, delimiter=delimiter, unit=unit, max_rows=max_rows)
    fs = recording.effective_sample_rate(nominal_rate_hz)
    if fs is None:
        raise ValueError(
            "Cannot determine the sample rate from the timestamps; provide nominal_rate_hz."
        )
    rec_id = _store_recording(recording, fs, file_path=file_path)

    return json.dumps({
        "recording_id": rec_id,
        **recording.summary(),
        "sampling_freq_hz": round(fs, 6),
        "axes": {name: _signal_summary(recording.axis(name), fs) for name in AXES},
        "note": (
            f"Recording stored server-side as '{rec_id}'. "
            "Pass this recording_id to analyze_triaxial."
        ),
    }, indent=2)


# ===================================================================
# TOOL 5: Load Single-Axis Signal from File
# ===================================================================

@mcp.tool()
def load_signal_from_file(
    file_path: Annotated[str, Field(description="Absolute path to a CSV/TSV file")],
    signal_column: Annotated[int | str, Field(description="Column holding the acceleration (0-based index or header name)", default=1)] = 1,
    time_column: Annotated[int | str | None, Field(description="Column for time (index or name). Null if none", default=0)] = 0,
    sampling_freq_hz: Annotated[float | None, Field(description="Sampling frequency in Hz. Optional if a time column exists", default=None)] = None,
    delimiter: Annotated[str | None, Field(description="Column delimiter. Auto-detected if null", default=None)] = None,
) -> str:
    """Load one acceleration column as a single-axis signal."""
    result = load_axis_csv(
        file_path,
        signal_column=signal_column,
        time_column=time_column,
        sampling_freq_hz=sampling_freq_hz,
        delimiter=delimiter,
    )
    sig_id = _store_signal(result["signal"], result["sampling_freq_hz"], file_path=result["file_path"])
    arr = np.array(result["signal"], dtype=np.float64)

    return json.dumps({
        "signal_id": sig_id,
        **_signal_summary(arr, result["sampling_freq_hz"]),
        "file_path": result["file_path"],
    }, indent=2)


# ===================================================================
# TOOL 6: Compute Spectrum
# ===================================================================

@mcp.tool()
def compute_spectrum(
    signal_id: Annotated[str | None, Field(description="ID of a stored signal or recording. Preferred over raw array.", default=None)] = None,
    axis: Annotated[str | None, Field(description="Axis ('x', 'y', 'z') when signal_id is a recording", default=None)] = None,
    signal: Annotated[list[float] | None, Field(description="Time-domain acceleration array. Use signal_id instead for large signals.", default=None)] = None,
    sampling_freq_hz: Annotated[float | None, Field(description="Sampling frequency in Hz. Auto-resolved when using signal_id.", default=None)] = None,
    weighting: Annotated[str, Field(description="Weighting to apply to the displayed spectrum: 'none', 'Wg', 'Wb', 'Wd'", default="none")] = "none",
    max_freq_hz: Annotated[float | None, Field(description="Maximum frequency to summarise (Hz). Omit for full range", default=None)] = None,
) -> str:
    """Compute the single-sided amplitude spectrum of an acceleration signal.

    Returns a compact summary with the top peaks (DC excluded) and the
    peak frequency.
    """
    x, fs = _get_signal(signal_id, signal, sampling_freq_hz, axis)
    spectrum = weight_spectrum(forward_transform(x, fs), FrequencyWeighting.parse(weighting))

    return json.dumps({
        "weighting": FrequencyWeighting.parse(weighting).value,
        "peak_frequency_hz": spectrum.peak_frequency(skip_dc=True),
        **_spectrum_summary(spectrum, max_freq_hz),
    }, indent=2)


# ===================================================================
# TOOL 7: Apply Frequency Weighting
# ===================================================================

@mcp.tool()
def apply_frequency_weighting(
    signal_id: Annotated[str | None, Field(description="ID of a stored signal or recording", default=None)] = None,
    axis: Annotated[str | None, Field(description="Axis ('x', 'y', 'z') when signal_id is a recording", default=None)] = None,
    signal: Annotated[list[float] | None, Field(description="Raw acceleration array", default=None)] = None,
    sampling_freq_hz: Annotated[float | None, Field(description="Sampling frequency in Hz", default=None)] = None,
    weighting: Annotated[str | None, Field(description="Weighting: 'Wg', 'Wb', 'Wd' or 'none'. Omit for the server default", default=None)] = None,
) -> str:
    """Apply a whole-body vibration weighting in the frequency domain.

    Returns a new signal_id for the weighted signal.
    """
    x, fs = _get_signal(signal_id, signal, sampling_freq_hz, axis)
    kind = _weighting(weighting)
    weighted = apply_weighting(x, fs, kind)
    sig_id = _store_signal(weighted, fs, source=signal_id or "raw_input", weighting=kind.value)

    return json.dumps({
        "signal_id": sig_id,
        "weighting": kind.value,
        "original": _signal_summary(x, fs),
        "weighted": _signal_summary(weighted, fs),
    }, indent=2)


# ===================================================================
# TOOL 8: Compute Dose Metrics
# ===================================================================

@mcp.tool()
def compute_dose_metrics(
    signal_id: Annotated[str | None, Field(description="ID of a stored signal or recording", default=None)] = None,
    axis: Annotated[str | None, Field(description="Axis ('x', 'y', 'z') when signal_id is a recording", default=None)] = None,
    signal: Annotated[list[float] | None, Field(description="Raw acceleration array", default=None)] = None,
    sampling_freq_hz: Annotated[float | None, Field(description="Sampling frequency in Hz", default=None)] = None,
    weighting: Annotated[str, Field(description="Weighting applied before the metrics. 'none' if the signal is already weighted", default="none")] = "none",
    mtvv_window_s: Annotated[float | None, Field(description="MTVV running-RMS window in seconds. Omit for the server default (1 s)", default=None)] = None,
) -> str:
    """Compute RMS, VDV and MTVV of an acceleration signal.

    Metrics that cannot be computed (empty signal, invalid sample rate,
    signal shorter than the MTVV window) are reported as null.
    """
    x, fs = _get_signal(signal_id, signal, sampling_freq_hz, axis)
    kind = FrequencyWeighting.parse(weighting)
    window = mtvv_window_s if mtvv_window_s is not None else _settings.mtvv_window_s
    weighted = apply_weighting(x, fs, kind)
    dose = compute_dose(weighted, fs, window)
    trace = running_rms(weighted, fs, window)

    return json.dumps({
        "weighting": kind.value,
        "mtvv_window_s": window,
        **dose.to_dict(),
        "mtvv_window_start_s": round(float(np.argmax(trace)) / fs, 3) if trace.size else None,
    }, indent=2)


# ===================================================================
# TOOL 9: Analyze Triaxial Recording
# ===================================================================

@mcp.tool()
def analyze_triaxial(
    recording_id: Annotated[str | None, Field(description="ID of a stored triaxial recording", default=None)] = None,
    x: Annotated[list[float] | None, Field(description="Raw x-axis acceleration (with y, z and sampling_freq_hz)", default=None)] = None,
    y: Annotated[list[float] | None, Field(description="Raw y-axis acceleration", default=None)] = None,
    z: Annotated[list[float] | None, Field(description="Raw z-axis acceleration", default=None)] = None,
    sampling_freq_hz: Annotated[float | None, Field(description="Sampling frequency in Hz for raw arrays", default=None)] = None,
    weighting: Annotated[str | None, Field(description="Weighting for the dose metrics: 'Wg', 'Wb', 'Wd' or 'none'. Omit for the server default", default=None)] = None,
    remove_gravity: Annotated[bool, Field(description="Remove the static gravity component from each axis first", default=False)] = False,
) -> str:
    """Run the full whole-body vibration analysis on three axes.

    Returns per-axis statistics, peak frequency, dose metrics and the
    combined (fourth-power sum) VDV.
    """
    kind = _weighting(weighting)
    if recording_id:
        entry = _resolve_entry(recording_id)
        if entry["_type"] != "recording":
            raise ValueError(f"'{recording_id}' is not a triaxial recording")
        result = _analyzer.analyze_recording(
            entry["recording"],
            nominal_rate=entry["sampling_freq_hz"],
            remove_gravity=remove_gravity,
            weighting=kind,
        )
    elif x is not None and y is not None and z is not None:
        if sampling_freq_hz is None:
            raise ValueError("sampling_freq_hz is required when passing raw x/y/z arrays")
        axes = [x, y, z]
        if remove_gravity:
            axes = [preprocessing.remove_gravity(a) for a in axes]
        result = _analyzer.analyze(*axes, sample_rate=sampling_freq_hz, weighting=kind)
    else:
        raise ValueError("Provide either recording_id or raw x, y, z arrays with sampling_freq_hz.")

    return json.dumps({
        "recording_id": recording_id or "raw_input",
        **result.to_dict(),
    }, indent=2)


# ===================================================================
# UTILITY TOOLS: Data store management
# ===================================================================

@mcp.tool()
def list_stored_data() -> str:
    """List all recordings and signals currently stored in server memory.

    Returns a compact summary of each stored item (ID, type, size) without
    the raw data arrays.
    """
    if not _store:
        return json.dumps({
            "stored_items": [],
            "note": "No data stored yet. Use generate_test_vibration or load_recording_from_file to create recordings.",
        })

    items = []
    for sid, entry in sorted(_store.items()):
        info: dict = {"id": sid, "type": entry["_type"], "sampling_freq_hz": entry["sampling_freq_hz"]}
        if entry["_type"] == "recording":
            info.update(entry["recording"].summary())
        else:
            info["n_samples"] = len(entry["signal"])
            if "weighting" in entry:
                info["weighting"] = entry["weighting"]
        items.append(info)

    return json.dumps({"stored_items": items, "total": len(items)}, indent=2, default=str)


@mcp.tool()
def clear_stored_data(
    data_id: Annotated[str | None, Field(description="ID of a specific item to remove, or omit to clear everything", default=None)] = None,
) -> str:
    """Remove stored recordings and signals from memory.

    Pass a specific data_id to remove one item, or omit to clear all.
    """
    if data_id is not None:
        if _store.pop(data_id, None) is not None:
            return json.dumps({"cleared": data_id, "remaining": len(_store)})
        return json.dumps({"error": f"ID '{data_id}' not found in store."})

    count = len(_store)
    _store.clear()
    return json.dumps({"cleared": "all", "items_removed": count})


# ===================================================================
# PROMPT: Guided assessment
# ===================================================================

@mcp.prompt()
def assess_whole_body_vibration(
    activity: str = "driving",
    posture: str = "seated",
    exposure_hours: str = "8",
) -> str:
    """Step-by-step guided prompt for a whole-body vibration assessment."""
    return f"""You are assessing whole-body vibration exposure for a {posture} person while {activity}.
Daily exposure duration: {exposure_hours} h.

**Server-side data store:**
Recordings and signals are stored on the server and referenced by short IDs
(rec_xxxx, sig_xxxx). NEVER pass raw sample arrays in conversation.

Follow this workflow:

1. **Load the recording**:
   - From a file: `inspect_recording_file`, then `load_recording_from_file`
     (timestamp,x,y,z columns; the effective sample rate comes from the timestamps)
   - Or generate a synthetic one with `generate_test_vibration`

2. **Choose the weighting** (read `wbv://weighting-curves`):
   - Wd for the horizontal x/y axes, Wb or Wg for the vertical z axis.

3. **Run `analyze_triaxial(recording_id=...)`**, with `remove_gravity=true`
   for raw accelerometer data.

4. **Drill into an axis** with `compute_spectrum(signal_id=..., axis=...)`
   and `compute_dose_metrics(signal_id=..., axis=..., weighting=...)`.

5. **Report** per-axis RMS, VDV and MTVV, the combined VDV, the dominant
   frequencies, and whether shocks make VDV/MTVV more relevant than RMS.
"""


# ---------------------------------------------------------------------------
# Server entry
# ---------------------------------------------------------------------------

def serve(transport: Literal["stdio", "sse", "streamable-http"] = "stdio") -> None:
    """Start the WBV MCP server."""
    logger.info(
        "Starting WBV server (transport=%s, default weighting=%s)",
        transport, _settings.default_weighting.value,
    )
    mcp.run(transport=transport)
