"""
Line-oriented interpreter for a restricted OpenQASM 2.0 subset.

Each source line is normalized, parsed into an :class:`Instruction` and
executed immediately against a :class:`QubitSystem`.

Supported statements:
    - OPENQASM header and include lines (skipped)
    - qreg name[N];   re-creates the system with N qubits
    - creg name[N];   accepted and ignored
    - h q[i]; x q[i];
    - cx q[c], q[t];  (first operand is the control)
    - measure q[i];   (an optional "-> c[j]" target is ignored)
    - // line comments

Bad lines are logged and skipped; execution carries on with the next
line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from tiny_qsim import config
from tiny_qsim.core import gates
from tiny_qsim.core.statevector import QubitSystem
from tiny_qsim.exceptions import QasmExecutionError, QasmParseError, SimulatorError
from tiny_qsim.logging_config import get_logger


# ---------------------------------------------------------------------------
# Instruction
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Instruction:
    """A single opcode with its qubit operands."""
    opcode: str
    qubits: tuple[int, ...]

    def __str__(self) -> str:
        return " ".join([self.opcode, *map(str, self.qubits)])


# ---------------------------------------------------------------------------
# Normalization and parsing
# ---------------------------------------------------------------------------

_OPERAND = r"[A-Za-z_][A-Za-z0-9_]*\[(\d+)\]"

_MEASURE_RE = re.compile(rf"^measure\s+{_OPERAND}(?:\s*->\s*[A-Za-z_][A-Za-z0-9_]*\[\d+\])?$")
_CX_RE = re.compile(rf"^cx\s+{_OPERAND}\s*,\s*{_OPERAND}$")
_SINGLE_RE = re.compile(rf"^(h|x)\s+{_OPERAND}$")

_QREG_RE = re.compile(r"^qreg\s+[A-Za-z_][A-Za-z0-9_]*\[(\d+)\]$")
_CREG_RE = re.compile(r"^creg\s+[A-Za-z_][A-Za-z0-9_]*\[(\d+)\]$")

_HEADER_MARKERS = ("openqasm", "include")


def normalize_line(line: str) -> str:
    """Strip the // comment, statement terminators and surrounding whitespace."""
    return line.split("//", 1)[0].replace(";", "").strip()


def parse_line(line: str, lineno: int = 0) -> Instruction:
    """
    Parse one gate or measurement statement.

    Parameters
    ----------
    line : str
        Raw source line; it is normalized first.
    lineno : int
        Line number used in error messages.

    Raises
    ------
    QasmParseError
        If the line is not one of ``measure``, ``cx``, ``h`` or ``x``.
    """
    cleaned = normalize_line(line)

    match = _MEASURE_RE.match(cleaned)
    if match:
        return Instruction("measure", (int(match.group(1)),))

    match = _CX_RE.match(cleaned)
    if match:
        return Instruction("cx", (int(match.group(1)), int(match.group(2))))

    match = _SINGLE_RE.match(cleaned)
    if match:
        return Instruction(match.group(1), (int(match.group(2)),))

    raise QasmParseError(f"Unsupported QASM: {line.strip()!r}", lineno)


def is_header(line: str) -> bool:
    """True for OPENQASM version and include lines (case-insensitive)."""
    lowered = line.lower()
    return any(marker in lowered for marker in _HEADER_MARKERS)


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

class QasmInterpreter:
    """
    Executes QASM source line by line against a :class:`QubitSystem`.

    Parameters
    ----------
    system : QubitSystem, optional
        System to drive. Defaults to a fresh ``config.DEFAULT_QUBITS``
        register. A ``qreg`` line resets it in place, so the same object
        stays valid after the run.
    logger : logging.Logger, optional
        Diagnostic channel for progress and recovered errors.

    Example
    -------
    >>> interp = QasmInterpreter()
    >>> interp.run_source('''
    ... qreg q[2];
    ... h q[0];
    ... cx q[0], q[1];
    ... ''')
    >>> interp.system.run_shots(100).counts
    {'00': 52, '11': 48}
    """

    def __init__(
        self,
        system: QubitSystem | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or get_logger(__name__)
        self.system = system if system is not None else QubitSystem(
            config.DEFAULT_QUBITS, logger=self._logger
        )
        self.errors: list[SimulatorError] = []
        self.measurements: list[tuple[int, int]] = []

    # -- Entry points -------------------------------------------------------

    def run_file(self, path: str | Path) -> bool:
        """
        Load a QASM file and run it.

        Returns False (after logging) if the file cannot be read.
        """
        try:
            source = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            self._logger.error("Failed to open QASM file %s: %s", path, exc)
            return False

        self._logger.info("Loading QASM program: %s", path)
        self.run_source(source)
        return True

    def run_source(self, source: str) -> QubitSystem:
        """Run every line of ``source`` and return the driven system."""
        self.errors = []
        self.measurements = []
        for lineno, line in enumerate(source.splitlines(), start=1):
            self.run_line(line, lineno)
        return self.system

    def run_line(self, line: str, lineno: int = 0) -> None:
        """Interpret one source line, logging and skipping it on error."""
        cleaned = normalize_line(line)
        if not cleaned or is_header(cleaned):
            return

        self._logger.debug("Executing: %s", cleaned)

        if _CREG_RE.match(cleaned):
            return

        try:
            match = _QREG_RE.match(cleaned)
            if match:
                self.declare_qubits(int(match.group(1)))
            else:
                self.execute(parse_line(cleaned, lineno))
        except SimulatorError as exc:
            self._logger.error("%s", exc)
            self.errors.append(exc)

    def declare_qubits(self, num_qubits: int) -> None:
        """Handle ``qreg``: discard the current circuit and start over."""
        self.system.reset(num_qubits)
        self._logger.info("Declared %d qubits", num_qubits)
        self.system.log_state()

    # -- Execution ----------------------------------------------------------

    def execute(self, instruction: Instruction) -> int | None:
        """
        Apply one instruction to the system.

        Returns the outcome for ``measure`` and None otherwise.

        Raises
        ------
        QasmExecutionError
            If the opcode is not known.
        """
        op = instruction.opcode
        qubits = instruction.qubits

        if op in ("h", "x"):
            self.system.apply_gate(gates.get_matrix(op), qubits[0])
        elif op == "cx":
            self.system.apply_cnot(qubits[0], qubits[1])
        elif op == "measure":
            result = self.system.measure_qubit(qubits[0])
            self.measurements.append((qubits[0], result))
            self._logger.info("Qubit %d = %d", qubits[0], result)
            return result
        else:
            raise QasmExecutionError(f"Unknown instruction: {instruction}")
        return None


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def run_qasm(source: str, system: QubitSystem | None = None) -> QubitSystem:
    """
    Run QASM source and return the resulting system.

    Example
    -------
    >>> qs = run_qasm('''
    ...     OPENQASM 2.0;
    ...     include "qelib1.inc";
    ...     qreg q[1];
    ...     x q[0];
    ... ''')
    >>> qs.state
    array([0.+0.j, 1.+0.j])
    """
    return QasmInterpreter(system).run_source(source)
