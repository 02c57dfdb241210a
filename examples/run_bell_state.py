"""Example: Run the Bell state program on tiny-qsim."""
from pathlib import Path

from tiny_qsim import QasmInterpreter

PROGRAM = Path(__file__).resolve().parent.parent / "programs" / "bell.qasm"

print("=" * 50)
print("tiny-qsim: Bell State Example")
print("=" * 50)

interp = QasmInterpreter()
interp.run_file(PROGRAM)
result = interp.system.run_shots(1000)

print("\nMeasurement Results:")
for state, count in result.counts.items():
    print(f"  |{state}⟩: {count:4d} ({100*count/1000:5.1f}%)")

print("\nExpected: ~50% |00⟩ and ~50% |11⟩ (entangled!)")
