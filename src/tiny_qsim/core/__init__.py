"""Core simulation components."""
from .statevector import QubitSystem, ShotResult, RandomSource
from . import gates

__all__ = [
    'QubitSystem',
    'ShotResult',
    'RandomSource',
    'gates',
]
