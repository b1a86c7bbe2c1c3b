"""
YAML parsers for state machine descriptions.
"""

from asmdgen.errors import DecodeError

from .state_machine_parser import YamlStateMachineParser

__all__ = ["YamlStateMachineParser", "DecodeError"]
