"""
Base models and enumerations for state machine descriptions.

Field aliases are PascalCase (``ModuleName``, ``BitWidth``) so that the
models accept description files as written, while Python code can keep
using snake_case names.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_pascal


class AsmdBaseModel(BaseModel):
    """Base model with shared configuration for all description models.

    Provides PascalCase aliasing, assignment validation, and allows field
    population by either alias or Python name.
    """

    model_config = {
        "validate_assignment": True,
        "alias_generator": to_pascal,
        "populate_by_name": True,
    }


class StrictModel(AsmdBaseModel):
    """Base model that forbids unknown fields.

    Extra keys in a description almost always indicate a typo
    (``Bitwidth`` instead of ``BitWidth``).
    """

    model_config = {
        **AsmdBaseModel.model_config,
        "extra": "forbid",
    }


def scalar_to_text(v: Any) -> Any:
    """Coerce YAML scalars (``8``, ``true``, null) into description text."""
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    return v


class ClockType(str, Enum):
    """Active clock edge of the state register."""

    POSEDGE = "posedge"
    NEGEDGE = "negedge"

    @classmethod
    def from_string(cls, value: str) -> Optional["ClockType"]:
        """Case-insensitive lookup; returns None for unknown values."""
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @property
    def vhdl_level(self) -> str:
        """Clock level the edge settles at ('1' for rising, '0' for falling)."""
        return "1" if self is ClockType.POSEDGE else "0"


class ResetPolicy(str, Enum):
    """Tri-state asynchronous reset setting."""

    UNSPECIFIED = "unspecified"
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_value(cls, value: Any) -> Any:
        """Map booleans, null and enum strings onto ``ResetPolicy``.

        Unrecognized values are returned unchanged so that pydantic reports
        them as a validation error.
        """
        if value is None:
            return cls.UNSPECIFIED
        if isinstance(value, bool):
            return cls.ENABLED if value else cls.DISABLED
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "yes"):
                return cls.ENABLED
            if lowered in ("false", "no"):
                return cls.DISABLED
            return lowered
        return value

    def resolve(self) -> "ResetPolicy":
        """Resolve UNSPECIFIED to the default (ENABLED)."""
        return ResetPolicy.ENABLED if self is ResetPolicy.UNSPECIFIED else self
