"""
Parsers that turn description payloads into state machine models.
"""

from .yaml import DecodeError, YamlStateMachineParser

__all__ = ["YamlStateMachineParser", "DecodeError"]
