"""OpenQASM interpreter for tiny-qsim."""

from tiny_qsim.qasm.interpreter import (
    Instruction,
    QasmInterpreter,
    normalize_line,
    parse_line,
    run_qasm,
)
from tiny_qsim.qasm.teleport import TeleportationReport, verify_teleportation

__all__ = [
    "Instruction",
    "QasmInterpreter",
    "normalize_line",
    "parse_line",
    "run_qasm",
    "TeleportationReport",
    "verify_teleportation",
]
