"""Configuration for tiny-qsim, overridable through environment variables."""

import os

# Logging settings
LOG_LEVEL = os.getenv("TINY_QSIM_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv(
    "TINY_QSIM_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Numerical tolerances
NORM_TOLERANCE = float(os.getenv("TINY_QSIM_NORM_TOLERANCE", "1e-10"))
STATE_TOLERANCE = float(os.getenv("TINY_QSIM_STATE_TOLERANCE", "1e-8"))
FIDELITY_TOLERANCE = float(os.getenv("TINY_QSIM_FIDELITY_TOLERANCE", "1e-4"))

# Simulation defaults
DEFAULT_QUBITS = int(os.getenv("TINY_QSIM_DEFAULT_QUBITS", "3"))
DEFAULT_SHOTS = int(os.getenv("TINY_QSIM_DEFAULT_SHOTS", "1"))

# Export targets
DEFAULT_JSON_PATH = os.getenv("TINY_QSIM_JSON_PATH", "state.json")
DEFAULT_CSV_PATH = os.getenv("TINY_QSIM_CSV_PATH", "state.csv")
