"""
Quantum gate definitions.

Gates are 2x2 unitary matrices stored as read-only numpy arrays.
The constructors return fresh writable copies so callers can't
corrupt the shared constants.

Gate library: H (Hadamard), X (Pauli-X), Z (Pauli-Z).
Two-qubit CNOT is applied directly by the state vector engine.
"""

from __future__ import annotations

import numpy as np
from numpy import ndarray

from tiny_qsim.exceptions import UnknownGateError

# Type alias
Matrix = ndarray

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_SQRT2_INV = 1.0 / np.sqrt(2.0)


def _frozen(matrix: Matrix) -> Matrix:
    matrix.setflags(write=False)
    return matrix


# ---------------------------------------------------------------------------
# Single-qubit fixed gates
# ---------------------------------------------------------------------------

H = _frozen(np.array([[1, 1], [1, -1]], dtype=np.complex128) * _SQRT2_INV)
"""Hadamard gate."""

X = _frozen(np.array([[0, 1], [1, 0]], dtype=np.complex128))
"""Pauli-X (NOT) gate."""

Z = _frozen(np.array([[1, 0], [0, -1]], dtype=np.complex128))
"""Pauli-Z (phase-flip) gate."""


def hadamard() -> Matrix:
    """Hadamard gate: creates an equal superposition from a basis state."""
    return H.copy()


def pauli_x() -> Matrix:
    """Pauli-X gate: bit flip."""
    return X.copy()


def pauli_z() -> Matrix:
    """Pauli-Z gate: phase flip on |1>."""
    return Z.copy()


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

_GATES = {"h": H, "x": X, "z": Z}


def get_matrix(name: str) -> Matrix:
    """Get a gate matrix by its QASM opcode name (case-insensitive)."""
    try:
        return _GATES[name.lower()].copy()
    except KeyError:
        raise UnknownGateError(f"Unknown gate: '{name}'") from None


def is_unitary(gate: Matrix, tol: float = 1e-10) -> bool:
    """Check if a matrix is unitary: U†U = I"""
    n = gate.shape[0]
    product = gate.conj().T @ gate
    return np.allclose(product, np.eye(n), atol=tol)
