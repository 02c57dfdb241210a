"""
tiny-qsim: a small state vector quantum circuit simulator.

Features:
- Full state vector over N qubits (bit k of a basis index is qubit k)
- Gate library: H, X, Z plus CNOT
- Full and single-qubit measurement with renormalization
- Shot sampling into bitstring histograms
- Line-by-line interpreter for a restricted OpenQASM subset
- Teleportation check, JSON/CSV state export

Quick Start:
    >>> from tiny_qsim import run_qasm
    >>> qs = run_qasm('''
    ... qreg q[2];
    ... h q[0];
    ... cx q[0], q[1];
    ... ''')
    >>> print(qs.run_shots(1000).counts)  # {'00': ~500, '11': ~500}
"""
__version__ = "1.0.0"

# Core components
from .core import QubitSystem, ShotResult, gates
from .exceptions import (
    SimulatorError,
    QubitIndexError,
    InvalidMeasurementError,
    UnknownGateError,
    InvalidOperationError,
    QasmParseError,
    QasmExecutionError,
)

# Interpreter
from .qasm import (
    Instruction,
    QasmInterpreter,
    TeleportationReport,
    parse_line,
    run_qasm,
    verify_teleportation,
)

# Export
from .export import state_to_json, state_to_csv, save_state

__all__ = [
    # Core
    'QubitSystem',
    'ShotResult',
    'gates',
    # Errors
    'SimulatorError',
    'QubitIndexError',
    'InvalidMeasurementError',
    'UnknownGateError',
    'InvalidOperationError',
    'QasmParseError',
    'QasmExecutionError',
    # Interpreter
    'Instruction',
    'QasmInterpreter',
    'TeleportationReport',
    'parse_line',
    'run_qasm',
    'verify_teleportation',
    # Export
    'state_to_json',
    'state_to_csv',
    'save_state',
]
