"""File input for timestamped triaxial acceleration recordings.

Reads the ``timestamp,x,y,z`` CSV layout produced by the capture app (also
TSV).  Single-axis signals can be loaded from any numeric column.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import numpy as np

from mcp_server_wbv.analysis.preprocessing import AccelerationUnit, convert_units, estimate_sample_rate
from mcp_server_wbv.analysis.recording import TriaxialRecording

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = ("timestamp", "x", "y", "z")
SUPPORTED_EXTENSIONS = {".csv", ".tsv", ".txt"}


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def _read_rows(path: Path, delimiter: str) -> tuple[list[str] | None, list[list[str]]]:
    """Return (header, data rows).  A header is detected by non-numeric cells."""
    header: list[str] | None = None
    rows: list[list[str]] = []
    with open(path, newline="", encoding="utf-8-sig") as fh:
        reader = csv.reader(fh, delimiter=delimiter)
        for row in reader:
            if not row or all(not cell.strip() for cell in row):
                continue
            if header is None and not rows and not all(_is_number(c.strip()) for c in row):
                header = [c.strip() for c in row]
                continue
            rows.append(row)
    return header, rows


def _resolve_col(col: int | str, header: list[str] | None) -> int:
    if isinstance(col, int):
        return col
    if header is not None:
        lowered = [h.lower() for h in header]
        if col.lower() in lowered:
            return lowered.index(col.lower())
    raise ValueError(f"Column '{col}' not found in header: {header}")


def _default_delimiter(path: Path) -> str:
    return "\t" if path.suffix.lower() in (".tsv", ".txt") else ","


def load_triaxial_csv(
    file_path: str,
    delimiter: str | None = None,
    columns: tuple[int | str, int | str, int | str, int | str] = DEFAULT_COLUMNS,
    unit: AccelerationUnit | str = AccelerationUnit.METERS_PER_SECOND_SQUARED,
    max_rows: int | None = None,
) -> TriaxialRecording:
    """Load a ``timestamp,x,y,z`` recording from a CSV / TSV file.

    Header names are matched case-insensitively.  Without a header the
    columns are taken positionally (0, 1, 2, 3).  Rows that cannot be parsed
    are skipped and counted in a warning.

    Args:
        file_path: Path to the file.
        delimiter: Column delimiter.  ``None`` → ``","`` for .csv,
            ``"\\t"`` for .tsv/.txt.
        columns: Timestamp, x, y, z columns (header names or 0-based indices).
        unit: Unit of the acceleration columns; converted to m/s².
        max_rows: Maximum number of data rows to read (``None`` → all).

    Returns:
        :class:`TriaxialRecording` in m/s².

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a column is missing or no valid data rows remain.
    """
    path = Path(file_path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    header, rows = _read_rows(path, delimiter or _default_delimiter(path))
    if max_rows is not None:
        rows = rows[:max_rows]
    if not rows:
        raise ValueError(f"No data rows found in {path}")

    if header is None:
        indices = [c if isinstance(c, int) else pos for pos, c in enumerate(columns)]
    else:
        indices = [_resolve_col(c, header) for c in columns]

    parsed: list[tuple[float, float, float, float]] = []
    skipped = 0
    for row in rows:
        try:
            parsed.append(tuple(float(row[i]) for i in indices))  # type: ignore[arg-type]
        except (IndexError, ValueError):
            skipped += 1

    if skipped:
        logger.warning("Skipped %d malformed row(s) in %s", skipped, path)
    if not parsed:
        raise ValueError(f"No valid data rows found in {path}")

    data = np.array(parsed, dtype=np.float64)
    return TriaxialRecording.from_arrays(
        data[:, 0],
        convert_units(data[:, 1], unit),
        convert_units(data[:, 2], unit),
        convert_units(data[:, 3], unit),
    )


def load_axis_csv(
    file_path: str,
    signal_column: int | str = 1,
    time_column: int | str | None = 0,
    sampling_freq_hz: float | None = None,
    delimiter: str | None = None,
) -> dict:
    """Load a single acceleration column as a signal.

    The sample rate is estimated from the time column unless
    ``sampling_freq_hz`` is given.

    Returns:
        ``dict`` with keys ``signal``, ``sampling_freq_hz``, ``n_samples``,
        ``duration_s``, ``file_path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the sampling frequency cannot be determined.
    """
    path = Path(file_path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    header, rows = _read_rows(path, delimiter or _default_delimiter(path))
    sig_idx = _resolve_col(signal_column, header)
    time_idx = _resolve_col(time_column, header) if time_column is not None else None

    signal_vals: list[float] = []
    time_vals: list[float] = []
    for row in rows:
        try:
            value = float(row[sig_idx])
            t = float(row[time_idx]) if time_idx is not None else None
        except (IndexError, ValueError):
            continue  # skip malformed rows
        signal_vals.append(value)
        if t is not None:
            time_vals.append(t)

    if sampling_freq_hz is None:
        sampling_freq_hz = estimate_sample_rate(time_vals)
    if sampling_freq_hz is None:
        raise ValueError(
            "Cannot determine sampling frequency; provide sampling_freq_hz "
            "or include a time column."
        )

    n = len(signal_vals)
    return {
        "signal": signal_vals,
        "sampling_freq_hz": float(sampling_freq_hz),
        "n_samples": n,
        "duration_s": round(n / sampling_freq_hz, 6),
        "file_path": str(path),
    }


def get_recording_file_info(file_path: str) -> dict:
    """Return file metadata without parsing the samples.

    Args:
        file_path: Path to the recording file.

    Returns:
        Dictionary with size, header line, first data line and row count.
    """
    path = Path(file_path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    size_bytes = path.stat().st_size
    info: dict = {
        "file_path": str(path),
        "file_name": path.name,
        "extension": path.suffix.lower(),
        "size_bytes": size_bytes,
        "size_mb": round(size_bytes / (1024 * 1024), 2),
    }
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        info["format"] = "unknown"
        return info

    with open(path, encoding="utf-8-sig") as fh:
        first_line = fh.readline().strip()
        second_line = fh.readline().strip()
        line_count = 2 if second_line else (1 if first_line else 0)
        for _ in fh:
            line_count += 1
    info["format"] = "csv"
    info["header_line"] = first_line
    info["sample_data_line"] = second_line
    info["total_lines"] = line_count
    return info
