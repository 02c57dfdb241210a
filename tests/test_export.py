"""Tests for JSON/CSV state export."""

import json
import logging

import numpy as np
import pytest

from tiny_qsim import QubitSystem, gates as g
from tiny_qsim.export import (
    parse_state_csv,
    parse_state_json,
    save_state,
    state_to_csv,
    state_to_json,
)

S = 1 / np.sqrt(2)


@pytest.fixture
def mixed_state():
    """Amplitudes with both signs across three qubits."""
    qs = QubitSystem(3)
    qs.apply_gate(g.H, 0)
    qs.apply_cnot(0, 2)
    qs.apply_gate(g.Z, 0)
    return qs


def test_json_layout():
    qs = QubitSystem(2)
    qs.apply_gate(g.X, 0)
    doc = json.loads(state_to_json(qs))
    assert list(doc) == ["00", "01", "10", "11"]
    assert doc["01"] == [1.0, 0.0]
    assert doc["00"] == [0.0, 0.0]


def test_csv_layout():
    qs = QubitSystem(1)
    qs.apply_gate(g.X, 0)
    lines = state_to_csv(qs).splitlines()
    assert lines[0] == "state,real,imag"
    assert lines[1].startswith("0,")
    assert lines[2] == "1,1.0,0.0"


def test_json_and_csv_agree(mixed_state):
    from_json = parse_state_json(state_to_json(mixed_state))
    from_csv = parse_state_csv(state_to_csv(mixed_state))
    assert from_json == from_csv
    assert from_json["101"] == pytest.approx((-S, 0.0))


def test_csv_keeps_leading_zeros(mixed_state):
    assert "000" in parse_state_csv(state_to_csv(mixed_state))


def test_export_matches_amplitudes(mixed_state):
    exported = parse_state_json(state_to_json(mixed_state))
    for bits, re, im in mixed_state.amplitudes():
        assert exported[bits] == (re, im)


@pytest.mark.parametrize("fmt,loader", [("json", parse_state_json), ("csv", parse_state_csv)])
def test_save_state(tmp_path, mixed_state, fmt, loader):
    path = tmp_path / f"state.{fmt}"
    assert save_state(mixed_state, path, fmt)
    assert loader(path.read_text()) == parse_state_json(state_to_json(mixed_state))


def test_save_state_format_is_case_insensitive(tmp_path, mixed_state):
    assert save_state(mixed_state, tmp_path / "s.csv", "CSV")


def test_save_state_unknown_format(tmp_path, mixed_state):
    with pytest.raises(ValueError, match="Unknown export format"):
        save_state(mixed_state, tmp_path / "s.xml", "xml")


def test_save_state_unwritable(tmp_path, mixed_state, caplog):
    target = tmp_path / "missing_dir" / "state.json"
    with caplog.at_level(logging.ERROR):
        assert not save_state(mixed_state, target)
    assert "Failed to write" in caplog.text
    assert not target.exists()
