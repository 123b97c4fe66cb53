"""WBV analysis library — frequency weighting, spectra and vibration dose."""

from mcp_server_wbv.analysis.dose import DoseResult, compute_dose, mtvv, rms, vdv, vdv_total
from mcp_server_wbv.analysis.filtering import apply_weighting
from mcp_server_wbv.analysis.orchestrator import (
    AnalysisState,
    TriaxialAnalyzer,
    TriaxialResult,
    analyze_axis,
)
from mcp_server_wbv.analysis.recording import TriaxialRecording
from mcp_server_wbv.analysis.spectral import Spectrum, forward_transform, inverse_transform
from mcp_server_wbv.analysis.weighting import FrequencyWeighting, gain

__all__ = [
    "FrequencyWeighting",
    "gain",
    "Spectrum",
    "forward_transform",
    "inverse_transform",
    "apply_weighting",
    "DoseResult",
    "rms",
    "vdv",
    "mtvv",
    "vdv_total",
    "compute_dose",
    "AnalysisState",
    "TriaxialAnalyzer",
    "TriaxialResult",
    "analyze_axis",
    "TriaxialRecording",
]
