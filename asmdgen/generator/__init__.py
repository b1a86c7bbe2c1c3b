"""
HDL generators for state machine descriptions.
"""

from .base_generator import BaseGenerator

__all__ = ["BaseGenerator"]
