"""
asmdgen - VHDL state machine skeleton generator.

Reads a declarative state machine description (YAML or JSON), validates and
normalizes it, and renders the entity/architecture skeleton with the clocked
state-register process.
"""

__version__ = "0.1.0"
