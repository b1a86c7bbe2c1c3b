"""
VHDL generation for state machine skeletons.
"""

from .vhdl_generator import VhdlStateMachineGenerator, format_header_date

__all__ = ["VhdlStateMachineGenerator", "format_header_date"]
