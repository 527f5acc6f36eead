"""
Trilateration package: source location from three distance readings
and recovery of a message from three redacted copies.
"""

from trilateration.contracts import (
    Point, Reading, Position, Satellite, LocatorConfig,
    PairIncoherent, DegenerateConfiguration, ResidualTooLarge, NoMessageFound,
)
from trilateration.solver import solve, locate
from trilateration.message import merge

__version__ = "0.1.0"
