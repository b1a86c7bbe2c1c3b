"""
Variable (port, generic, register) and functional unit definitions.
"""

from typing import Any, Dict

from pydantic import Field, field_validator

from .base import StrictModel, scalar_to_text

SCALAR_LOGIC_TYPE = "std_logic"


class Variable(StrictModel):
    """
    Named signal or value of a state machine.

    Used for entity ports (inputs/outputs), generics (parameters) and
    internal registers. The name is the key of the enclosing mapping.
    """

    bit_width: int = Field(default=1, ge=1, description="Width in bits; >1 selects a vector")
    type: str = Field(default="", description="Generic type; ports are sized by BitWidth")
    default_value: str = Field(default="", description="Literal default, used verbatim")

    @field_validator("type", "default_value", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return scalar_to_text(v)

    @property
    def is_vector(self) -> bool:
        """Check if variable is a vector (multi-bit)."""
        return self.bit_width > 1

    @property
    def range_string(self) -> str:
        """Get VHDL-style range string (e.g., '7 downto 0')."""
        if not self.is_vector:
            return ""
        return f"{self.bit_width - 1} downto 0"

    @property
    def port_type(self) -> str:
        """Port type: ``std_logic``, or a ``std_logic_vector`` range for W > 1.

        ``type`` is ignored; ports are always sized by ``bit_width``.
        """
        if not self.is_vector:
            return SCALAR_LOGIC_TYPE
        return f"{SCALAR_LOGIC_TYPE}_vector ({self.range_string})"

    @property
    def vhdl_type(self) -> str:
        """Generic type text.

        Untyped and ``std_logic`` variables follow ``port_type``; any other
        type is used verbatim.
        """
        base = self.type.strip()
        if not base or base.lower() == SCALAR_LOGIC_TYPE:
            return self.port_type
        return base


class FunctionalUnit(StrictModel):
    """
    Sub-block of a state machine with its own interface.

    Declared for future composition; not rendered yet.
    """

    inputs: Dict[str, Variable] = Field(default_factory=dict, description="Unit inputs")
    outputs: Dict[str, Variable] = Field(default_factory=dict, description="Unit outputs")
    registers: Dict[str, Variable] = Field(default_factory=dict, description="Unit registers")
