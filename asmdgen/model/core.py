"""Main state machine model - the canonical representation."""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from asmdgen.utils import normalize_identifier

from .base import ClockType, ResetPolicy, StrictModel, scalar_to_text
from .variable import FunctionalUnit, Variable

CLOCK_PORT = "clk"
RESET_PORT = "rst"
DEFAULT_INDENT = "    "


class Options(StrictModel):
    """
    Module-level generation options.

    ``clock_type`` is kept as the raw input text; validation checks it and
    normalization folds it to lower case.
    """

    module_name: str = Field(default="", description="Human-facing module name")
    clock_type: str = Field(default="", description="'posedge' or 'negedge'")
    add_async_reset: ResetPolicy = Field(
        default=ResetPolicy.UNSPECIFIED, description="Add an asynchronous reset port"
    )
    first_state: str = Field(default="", description="Initial state name")
    indent: str = Field(default="", description="Indentation unit; empty means four spaces")
    author: str = Field(default="", description="Author for the header comment")

    @field_validator(
        "module_name", "clock_type", "first_state", "indent", "author", mode="before"
    )
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return scalar_to_text(v)

    @field_validator("module_name", "first_state", "author")
    @classmethod
    def single_line(cls, v: str) -> str:
        """Reject line breaks; these values end up inside VHDL comments and statements."""
        if "\n" in v or "\r" in v:
            raise ValueError("must be a single line")
        return v

    @field_validator("add_async_reset", mode="before")
    @classmethod
    def normalize_reset_policy(cls, v: Any) -> Any:
        return ResetPolicy.from_value(v)

    @property
    def normalized_module_name(self) -> str:
        """Module name with spaces, tabs and hyphens removed."""
        return normalize_identifier(self.module_name)

    @property
    def clock_edge(self) -> Optional[ClockType]:
        """Parsed clock type, or None if unrecognized."""
        return ClockType.from_string(self.clock_type)

    @property
    def has_async_reset(self) -> bool:
        """Whether the reset setting resolves to enabled."""
        return self.add_async_reset.resolve() is ResetPolicy.ENABLED


class StateMachine(StrictModel):
    """
    Complete state machine description - the single source of truth.

    The variable mappings keep declaration order, which is also the order
    ports and generics are rendered in.
    """

    options: Options = Field(default_factory=Options, description="Generation options")
    inputs: Dict[str, Variable] = Field(default_factory=dict, description="Input ports")
    outputs: Dict[str, Variable] = Field(default_factory=dict, description="Output ports")
    parameters: Dict[str, Variable] = Field(default_factory=dict, description="Generics")
    registers: Dict[str, Variable] = Field(default_factory=dict, description="Registers")
    functional_units: Dict[str, FunctionalUnit] = Field(
        default_factory=dict, description="Sub-units"
    )

    @property
    def reserved_port_names(self) -> List[str]:
        """Port names injected by normalization."""
        names = [CLOCK_PORT]
        if self.options.has_async_reset:
            names.append(RESET_PORT)
        return names
