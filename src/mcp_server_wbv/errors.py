"""Exception hierarchy for whole-body vibration analysis.

Numeric edge cases (empty input, zero sample rate) are absorbed by the
spectral transform, the weighting filter, the dose metrics and the
orchestrator with documented defaults.  Only the conditions below reach callers.
"""

from __future__ import annotations


class VibrationAnalysisError(Exception):
    """Base class for all errors raised by this package."""


class InvalidConfigurationError(VibrationAnalysisError, ValueError):
    """A parameter is outside its valid domain (sample rate, weighting name, ...)."""


class TransformError(VibrationAnalysisError):
    """The Fourier transform could not be computed for the given input."""


class MalformedInputError(VibrationAnalysisError, ValueError):
    """Per-axis inputs are inconsistent (e.g. different lengths)."""


class AnalysisBusyError(VibrationAnalysisError, RuntimeError):
    """An analysis is already running on this analyzer."""
