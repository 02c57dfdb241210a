"""
State export to JSON and CSV.

Both formats list every basis state in index order with bitstrings
written most significant qubit first, the same convention used by
``QubitSystem.measure_all``.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path

from tiny_qsim.core.statevector import QubitSystem
from tiny_qsim.logging_config import get_logger

_CSV_HEADER = ["state", "real", "imag"]


def state_to_json(system: QubitSystem) -> str:
    """Render the state as ``{"bits": [real, imag], ...}``."""
    doc = {bits: [re, im] for bits, re, im in system.amplitudes()}
    return json.dumps(doc, indent=2)


def state_to_csv(system: QubitSystem) -> str:
    """Render the state as CSV rows ``state,real,imag``."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(_CSV_HEADER)
    for bits, re, im in system.amplitudes():
        writer.writerow([bits, repr(re), repr(im)])
    return buf.getvalue()


def parse_state_json(text: str) -> dict[str, tuple[float, float]]:
    """Read a document produced by :func:`state_to_json`."""
    return {bits: (float(re), float(im)) for bits, (re, im) in json.loads(text).items()}


def parse_state_csv(text: str) -> dict[str, tuple[float, float]]:
    """Read a document produced by :func:`state_to_csv`."""
    reader = csv.DictReader(io.StringIO(text))
    # Bitstrings are kept as text so leading zeros survive
    return {row["state"]: (float(row["real"]), float(row["imag"])) for row in reader}


_FORMATTERS = {"json": state_to_json, "csv": state_to_csv}


def save_state(
    system: QubitSystem,
    path: str | Path,
    fmt: str = "json",
    logger: logging.Logger | None = None,
) -> bool:
    """
    Write the state to ``path`` as JSON or CSV.

    Returns False (after logging) if the file cannot be written.
    """
    log = logger or get_logger(__name__)
    try:
        formatter = _FORMATTERS[fmt.lower()]
    except KeyError:
        raise ValueError(f"Unknown export format: '{fmt}' (expected json or csv)") from None

    try:
        Path(path).write_text(formatter(system), encoding="utf-8")
    except OSError as exc:
        log.error("Failed to write %s: %s", path, exc)
        return False

    log.info("Exported to %s", path)
    return True
