"""Shared test fixtures for WBV tests."""

from __future__ import annotations

import csv
from pathlib import Path

import numpy as np
import pytest

from mcp_server_wbv.analysis.recording import TriaxialRecording
from mcp_server_wbv.analysis.test_signal import generate_test_recording, generate_vibration_signal

FS = 100.0


@pytest.fixture
def fs() -> float:
    return FS


@pytest.fixture
def tone_5hz():
    """Unit 5 Hz sine — 10 s at 100 Hz (whole number of cycles)."""
    t, x = generate_vibration_signal(10.0, FS, tones=[(5.0, 1.0)])
    return {"time": t, "signal": x, "fs": FS}


@pytest.fixture
def tone_10hz():
    """Unit 10 Hz sine — 10 s at 100 Hz."""
    t, x = generate_vibration_signal(10.0, FS, tones=[(10.0, 1.0)])
    return {"time": t, "signal": x, "fs": FS}


@pytest.fixture
def recording() -> TriaxialRecording:
    """Synthetic 10 s triaxial recording at 100 Hz, no gravity."""
    return generate_test_recording(duration_s=10.0, fs=FS, noise_std=0.01)


def write_recording_csv(path: Path, rec: TriaxialRecording, header: list[str] | None = None,
                        delimiter: str = ",") -> Path:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter)
        if header is not None:
            writer.writerow(header)
        for row in zip(rec.timestamps, rec.x, rec.y, rec.z):
            writer.writerow([f"{v:.9f}" for v in row])
    return path


@pytest.fixture
def csv_writer():
    """Writer for CSV exports of a recording: ``csv_writer(path, rec, header=None, delimiter=",")``."""
    return write_recording_csv


@pytest.fixture
def recording_csv(tmp_path: Path, recording: TriaxialRecording) -> Path:
    """CSV export of ``recording`` with a timestamp,x,y,z header."""
    return write_recording_csv(tmp_path / "recording.csv", recording, ["timestamp", "x", "y", "z"])


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
