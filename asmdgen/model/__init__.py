"""
Pydantic-based data models for state machine descriptions.

A description is decoded into ``StateMachine``, checked with ``validate``
and completed with ``normalize`` before it is handed to a generator.
"""

from .base import AsmdBaseModel, ClockType, ResetPolicy, StrictModel
from .core import CLOCK_PORT, DEFAULT_INDENT, RESET_PORT, Options, StateMachine
from .normalizer import normalize
from .validators import validate
from .variable import FunctionalUnit, Variable

__all__ = [
    # Base
    "AsmdBaseModel",
    "StrictModel",
    "ClockType",
    "ResetPolicy",
    # Variables
    "Variable",
    "FunctionalUnit",
    # Core
    "Options",
    "StateMachine",
    "CLOCK_PORT",
    "RESET_PORT",
    "DEFAULT_INDENT",
    # Passes
    "validate",
    "normalize",
]
