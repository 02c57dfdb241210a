"""Exception hierarchy for tiny-qsim."""


class SimulatorError(Exception):
    """Base class for every error raised by the simulator."""


class QubitIndexError(SimulatorError, IndexError):
    """A qubit index lies outside the register."""

    def __init__(self, index: int, num_qubits: int) -> None:
        super().__init__(
            f"Qubit index {index} out of range for {num_qubits}-qubit system"
        )
        self.index = index
        self.num_qubits = num_qubits


class InvalidMeasurementError(SimulatorError):
    """Surviving probability after a partial collapse was numerically zero."""

    def __init__(self, qubit: int, norm: float) -> None:
        super().__init__(
            f"Norm was zero (|psi|={norm:.3e}) after measuring qubit {qubit}; state invalid"
        )
        self.qubit = qubit
        self.norm = norm


class UnknownGateError(SimulatorError, ValueError):
    """Gate name not present in the gate library."""


class QasmParseError(SimulatorError):
    """Error during QASM parsing."""

    def __init__(self, message: str, line: int = 0) -> None:
        super().__init__(f"Line {line}: {message}" if line else message)
        self.line = line


class QasmExecutionError(SimulatorError):
    """A parsed instruction could not be executed."""


class InvalidOperationError(SimulatorError, ValueError):
    """An operation was given arguments it cannot act on."""
