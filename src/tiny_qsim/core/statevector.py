"""
Full state vector simulator.

The state of N qubits is a complex128 vector of length 2^N. Bit k of a
basis index holds the classical value of qubit k, so qubit 0 is the
least significant bit. Bitstrings are always rendered most significant
qubit first: the leftmost character is qubit N-1.

Memory usage: 2^n * 16 bytes (complex128)
    - 10 qubits: 16 KB
    - 20 qubits: 16 MB
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Protocol

import numpy as np
from numpy import ndarray

from tiny_qsim import config
from tiny_qsim.exceptions import (
    InvalidMeasurementError,
    InvalidOperationError,
    QubitIndexError,
)
from tiny_qsim.logging_config import get_logger


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float: ...


@dataclass
class ShotResult:
    """Histogram of repeated full measurements."""
    counts: dict[str, int]
    shots: int

    def most_frequent(self) -> str:
        """Return the most frequently measured bitstring."""
        return max(self.counts, key=self.counts.get)

    def probability(self, bitstring: str) -> float:
        """Return the observed frequency of a bitstring."""
        if self.shots == 0:
            return 0.0
        return self.counts.get(bitstring, 0) / self.shots


class QubitSystem:
    """
    N-qubit register holding a full state vector.

    Parameters
    ----------
    num_qubits : int
        Number of qubits, at least 1.
    rng : RandomSource, optional
        Source of uniform random numbers for measurement. Defaults to
        ``numpy.random.default_rng(seed)``.
    seed : int, optional
        Seed for the default generator. Ignored when ``rng`` is given.
        Leaving both unset gives non-reproducible runs.
    logger : logging.Logger, optional
        Diagnostic channel.

    Example
    -------
    >>> qs = QubitSystem(2, seed=7)
    >>> qs.apply_gate(gates.H, 0)
    >>> qs.apply_cnot(0, 1)
    >>> qs.run_shots(1000).counts
    {'00': 489, '11': 511}
    """

    def __init__(
        self,
        num_qubits: int,
        rng: RandomSource | None = None,
        seed: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._logger = logger or get_logger(__name__)
        self.reset(num_qubits)

    # -- Lifecycle ----------------------------------------------------------

    def reset(self, num_qubits: int | None = None) -> None:
        """
        Start a fresh circuit: |00...0⟩ over ``num_qubits`` qubits.

        All prior amplitudes and measurement history are discarded, even
        when the qubit count is unchanged.
        """
        if num_qubits is None:
            num_qubits = self.num_qubits
        if num_qubits < 1:
            raise InvalidOperationError(f"Need at least one qubit, got {num_qubits}")

        self.num_qubits = num_qubits
        self.dim = 2 ** num_qubits
        self._state = np.zeros(self.dim, dtype=np.complex128)
        self._state[0] = 1.0
        # Declared by creg but never read by the simulator.
        self.classical_bits = [0] * num_qubits
        self.last_measurements: dict[int, int] = {}

    def copy(self) -> QubitSystem:
        """
        Independent copy of the state and measurement history.

        The randomness source and logger are shared, so successive
        copies keep drawing fresh numbers from the same stream.
        """
        clone = QubitSystem.__new__(QubitSystem)
        clone._rng = self._rng
        clone._logger = self._logger
        clone.num_qubits = self.num_qubits
        clone.dim = self.dim
        clone._state = self._state.copy()
        clone.classical_bits = list(self.classical_bits)
        clone.last_measurements = dict(self.last_measurements)
        return clone

    # -- Accessors ----------------------------------------------------------

    @property
    def state(self) -> ndarray:
        """Return a copy of the flat state vector."""
        return self._state.copy()

    @property
    def last_measured_qubit0(self) -> int | None:
        return self.last_measurements.get(0)

    @property
    def last_measured_qubit1(self) -> int | None:
        return self.last_measurements.get(1)

    def probabilities(self) -> ndarray:
        """Return measurement probabilities for all basis states."""
        return np.abs(self._state) ** 2

    def norm(self) -> float:
        """Total squared norm of the state; 1 after every operation."""
        return float(np.sum(self.probabilities()))

    def bitstring(self, index: int) -> str:
        """Render a basis index as an N-character bitstring (qubit N-1 first)."""
        return format(index, f"0{self.num_qubits}b")

    def amplitudes(self) -> Iterator[tuple[str, float, float]]:
        """Yield (bitstring, real, imag) for every basis state in index order."""
        for i, amp in enumerate(self._state):
            yield self.bitstring(i), float(amp.real), float(amp.imag)

    def format_state(self, precision: int = 4) -> list[str]:
        """Render every amplitude as ``|bits⟩ = (re, imi)``."""
        return [
            f"|{bits}⟩ = ({re:.{precision}f}, {im:.{precision}f}i)"
            for bits, re, im in self.amplitudes()
        ]

    def log_state(self, level: int = logging.DEBUG) -> None:
        """Write the current amplitudes to the logger."""
        for line in self.format_state():
            self._logger.log(level, "  %s", line)

    def _check_qubit(self, index: int) -> None:
        if not 0 <= index < self.num_qubits:
            raise QubitIndexError(index, self.num_qubits)

    # -- Gates --------------------------------------------------------------

    def apply_gate(self, gate: ndarray, target: int) -> None:
        """
        Apply a single-qubit gate to ``target``.

        Every basis index i is paired with i XOR (1 << target). With b the
        target bit of i, the new amplitude at i is
        ``gate[b, b] * state[i] + gate[b, 1 - b] * state[flipped]``.
        The result is built in a fresh vector; updating in place would
        overwrite partners that have not been read yet.
        """
        self._check_qubit(target)
        gate = np.asarray(gate, dtype=np.complex128)
        if gate.shape != (2, 2):
            raise InvalidOperationError(f"Expected a 2x2 gate, got shape {gate.shape}")

        indices = np.arange(self.dim)
        bits = (indices >> target) & 1
        flipped = indices ^ (1 << target)

        new_state = gate[bits, bits] * self._state + gate[bits, 1 - bits] * self._state[flipped]
        self._state = new_state

    def apply_cnot(self, control: int, target: int) -> None:
        """Flip ``target`` on every basis state where ``control`` is 1."""
        self._check_qubit(control)
        self._check_qubit(target)
        if control == target:
            raise InvalidOperationError(f"CNOT control and target must differ (both {control})")

        indices = np.arange(self.dim)
        active = indices[((indices >> control) & 1) == 1]

        # Read from the old vector so each pair swaps exactly once
        new_state = self._state.copy()
        new_state[active] = self._state[active ^ (1 << target)]
        self._state = new_state

    # -- Measurement --------------------------------------------------------

    def measure(self) -> int:
        """
        Measure every qubit, collapse the state, return the basis index.

        Inverse-CDF sampling: the outcome is the smallest index whose
        cumulative probability exceeds r. If rounding keeps the total
        below r, the last index is chosen.
        """
        r = self._rng.random()
        cumulative = np.cumsum(self.probabilities())
        result = int(np.searchsorted(cumulative, r, side="right"))
        if result >= self.dim:
            result = self.dim - 1

        self._state = np.zeros(self.dim, dtype=np.complex128)
        self._state[result] = 1.0
        return result

    def measure_qubit(self, qubit: int) -> int:
        """
        Measure a single qubit, collapse the state, return 0 or 1.

        Amplitudes of the other qubits keep their relative values and are
        renormalized.

        Raises
        ------
        InvalidMeasurementError
            If the surviving amplitudes have (numerically) zero norm. The
            state is left untouched in that case.
        """
        self._check_qubit(qubit)
        indices = np.arange(self.dim)
        bits = (indices >> qubit) & 1

        probs = self.probabilities()
        p0 = float(np.sum(probs[bits == 0]))

        r = self._rng.random()
        outcome = 0 if r < p0 else 1

        collapsed = np.where(bits == outcome, self._state, 0)
        norm = float(np.sqrt(np.sum(np.abs(collapsed) ** 2)))
        if norm < config.NORM_TOLERANCE:
            self._logger.error("Norm was zero for qubit %d. State invalid.", qubit)
            raise InvalidMeasurementError(qubit, norm)

        self._state = collapsed / norm
        self.last_measurements[qubit] = outcome
        return outcome

    def measure_all(self) -> str:
        """Measure every qubit and return the outcome as a bitstring."""
        return self.bitstring(self.measure())

    def run_shots(self, shots: int) -> ShotResult:
        """
        Sample ``shots`` full measurements without touching this state.

        Each shot collapses its own copy of the system.
        """
        if shots < 0:
            raise InvalidOperationError(f"Number of shots must be non-negative, got {shots}")

        counts: dict[str, int] = {}
        for _ in range(shots):
            outcome = self.copy().measure_all()
            counts[outcome] = counts.get(outcome, 0) + 1

        return ShotResult(counts=dict(sorted(counts.items())), shots=shots)

    # -- Single-qubit views -------------------------------------------------

    def qubit_state(self, index: int) -> ndarray:
        """
        Approximate the state of one qubit as a normalized 2-vector.

        Sums all amplitudes with the qubit at 0 into amp0 and at 1 into
        amp1. This is not a partial trace: it is only meaningful when the
        qubit is unentangled with the rest, e.g. after the other qubits
        have been measured. Returns |0⟩ if the sums cancel out.
        """
        self._check_qubit(index)
        bits = (np.arange(self.dim) >> index) & 1
        amp0 = np.sum(self._state[bits == 0])
        amp1 = np.sum(self._state[bits == 1])

        norm = np.sqrt(abs(amp0) ** 2 + abs(amp1) ** 2)
        if norm < config.STATE_TOLERANCE:
            return np.array([1, 0], dtype=np.complex128)
        return np.array([amp0, amp1], dtype=np.complex128) / norm

    def fidelity_with(self, expected: ndarray, index: int) -> float:
        """
        Fidelity |⟨expected|actual⟩|² of one qubit against a pure state.

        ``actual`` is :meth:`qubit_state`, with the same caveat on
        entanglement. Returns 0.0 if ``expected`` is not a 2-vector.
        """
        expected = np.asarray(expected, dtype=np.complex128).ravel()
        actual = self.qubit_state(index)
        if expected.shape != actual.shape:
            return 0.0
        return float(np.abs(np.vdot(expected, actual)) ** 2)

    def __repr__(self) -> str:
        return f"QubitSystem(qubits={self.num_qubits}, dim={self.dim})"
