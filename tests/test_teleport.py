"""Tests for the teleportation verification protocol."""

import logging

import numpy as np
import pytest

from tiny_qsim import QubitSystem
from tiny_qsim.qasm import verify_teleportation
from tiny_qsim.qasm.teleport import EXPECTED_STATES, MINUS, PLUS, apply_corrections

S = 1 / np.sqrt(2)

# r < 0.5 measures 0, r >= 0.5 measures 1 (each Bell outcome has p = 1/2)
OUTCOME_DRAWS = {
    (0, 0): (0.25, 0.25),
    (0, 1): (0.25, 0.75),
    (1, 0): (0.75, 0.25),
    (1, 1): (0.75, 0.75),
}


@pytest.fixture
def teleport_qasm(programs_dir):
    return programs_dir / "teleport.qasm"


@pytest.mark.parametrize("outcome", sorted(OUTCOME_DRAWS))
def test_payload_arrives_on_qubit_two(fixed_rng, teleport_qasm, outcome):
    """After corrections qubit 2 holds the |+⟩ payload for every outcome."""
    qs = QubitSystem(3, rng=fixed_rng(*OUTCOME_DRAWS[outcome]))
    report = verify_teleportation(teleport_qasm, qs)
    assert report.success
    assert report.corrections == outcome
    assert qs.fidelity_with(PLUS, 2) == pytest.approx(1.0, abs=1e-4)
    assert qs.norm() == pytest.approx(1.0)


@pytest.mark.parametrize("outcome", [(0, 0), (0, 1)])
def test_verified_without_phase_correction(fixed_rng, teleport_qasm, outcome):
    qs = QubitSystem(3, rng=fixed_rng(*OUTCOME_DRAWS[outcome]))
    report = verify_teleportation(teleport_qasm, qs)
    np.testing.assert_allclose(report.expected, PLUS)
    assert report.fidelity == pytest.approx(1.0, abs=1e-4)
    assert report.verified


@pytest.mark.parametrize("outcome", [(1, 0), (1, 1)])
def test_phase_outcomes_compare_against_minus(fixed_rng, teleport_qasm, outcome):
    """m0 = 1 rows of the lookup expect |−⟩, orthogonal to the |+⟩ payload."""
    qs = QubitSystem(3, rng=fixed_rng(*OUTCOME_DRAWS[outcome]))
    report = verify_teleportation(teleport_qasm, qs)
    np.testing.assert_allclose(report.expected, MINUS)
    assert report.fidelity == pytest.approx(0.0, abs=1e-4)
    assert not report.verified


def test_expected_state_table():
    assert set(EXPECTED_STATES) == {(0, 0), (0, 1), (1, 0), (1, 1)}
    for (m0, _), state in EXPECTED_STATES.items():
        np.testing.assert_allclose(state, PLUS if m0 == 0 else MINUS)
    np.testing.assert_allclose(PLUS, [2 ** -0.5, 2 ** -0.5])
    np.testing.assert_allclose(MINUS, [2 ** -0.5, -(2 ** -0.5)])


def test_source_string_is_accepted(fixed_rng):
    qs = QubitSystem(3, rng=fixed_rng(0.25))
    report = verify_teleportation("""
    qreg q[3];
    h q[0];
    h q[1];
    cx q[1], q[2];
    cx q[0], q[1];
    h q[0];
    measure q[0];
    measure q[1];
    """, qs)
    assert report.corrections == (0, 0)
    assert report.verified


def test_missing_measurement_fails():
    qs = QubitSystem(3)
    report = verify_teleportation("qreg q[3];\nh q[0];\n", qs)
    assert not report.success
    assert report.corrections is None
    assert report.fidelity == 0.0
    assert not report.verified
    assert "not both measured" in report.reason


def test_only_one_measurement_fails(fixed_rng):
    qs = QubitSystem(3, rng=fixed_rng(0.25))
    report = verify_teleportation("qreg q[3];\nmeasure q[0];\n", qs)
    assert not report.success
    assert report.m0 == 0
    assert report.m1 is None


def test_register_without_target_qubit_fails(fixed_rng, caplog):
    qs = QubitSystem(3, rng=fixed_rng(0.25))
    with caplog.at_level(logging.ERROR):
        report = verify_teleportation("qreg q[2];\nmeasure q[0];\nmeasure q[1];\n", qs)
    assert not report.success
    assert report.corrections == (0, 0)
    assert report.fidelity == 0.0
    assert "no qubit 2" in report.reason
    assert "Cannot teleport onto qubit 2" in caplog.text


def test_unreadable_file_fails(tmp_path):
    report = verify_teleportation(tmp_path / "nope.qasm", QubitSystem(3))
    assert not report.success
    assert report.reason.startswith("could not read")


def test_history_from_earlier_circuit_is_cleared(fixed_rng):
    """qreg starts a fresh circuit, so stale outcomes don't count."""
    qs = QubitSystem(3, rng=fixed_rng(0.25))
    qs.measure_qubit(0)
    qs.measure_qubit(1)
    report = verify_teleportation("qreg q[3];\nh q[2];\n", qs)
    assert not report.success


# ---------------------------------------------------------------------------
# Corrections
# ---------------------------------------------------------------------------

def test_corrections_x_then_z():
    """ZX|0⟩ = -|1⟩, whereas XZ|0⟩ = +|1⟩."""
    qs = QubitSystem(3)
    apply_corrections(qs, m0=1, m1=1)
    expected = np.zeros(8)
    expected[4] = -1
    np.testing.assert_array_equal(qs.state, expected)


def test_corrections_on_plus():
    qs = QubitSystem(3)
    qs.apply_gate(np.array([[S, S], [S, -S]]), 2)
    apply_corrections(qs, m0=1, m1=1)
    np.testing.assert_allclose(qs.qubit_state(2), MINUS, atol=1e-12)


def test_corrections_none():
    qs = QubitSystem(3)
    before = qs.state
    apply_corrections(qs, m0=0, m1=0)
    np.testing.assert_array_equal(qs.state, before)


def test_correction_x_only():
    qs = QubitSystem(3)
    apply_corrections(qs, m0=0, m1=1)
    assert qs.state[4] == 1
