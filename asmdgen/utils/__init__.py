"""Shared utility helpers for asmdgen."""

import re
from enum import Enum
from typing import Any

_STRIPPED_NAME_CHARS = re.compile(r"[ \t-]")
# Letter first; underscores only between letters/digits, never doubled or trailing.
_VHDL_IDENTIFIER = re.compile(r"[A-Za-z](?:_?[A-Za-z0-9])*")

# IEEE 1076-2008 reserved words (case-insensitive).
VHDL_RESERVED_WORDS = frozenset(
    """
    abs access after alias all and architecture array assert assume
    assume_guarantee attribute begin block body buffer bus case component
    configuration constant context cover default disconnect downto else elsif
    end entity exit fairness file for force function generate generic group
    guarded if impure in inertial inout is label library linkage literal loop
    map mod nand new next nor not null of on open or others out package
    parameter port postponed procedure process property protected pure range
    record register reject release rem report restrict restrict_guarantee
    return rol ror select sequence severity shared signal sla sll sra srl
    strong subtype then to transport type unaffected units until use variable
    vmode vprop vunit wait when while with xnor xor
    """.split()
)


def normalize_identifier(name: str) -> str:
    """Strip spaces, tabs and hyphens from a human-facing name.

    Examples:
        >>> normalize_identifier("My Module-A")
        'MyModuleA'
    """
    return _STRIPPED_NAME_CHARS.sub("", name)


def is_vhdl_identifier(name: str) -> bool:
    """Check that ``name`` is a VHDL basic identifier and not a reserved word."""
    if _VHDL_IDENTIFIER.fullmatch(name) is None:
        return False
    return name.lower() not in VHDL_RESERVED_WORDS


def enum_value(v: Any) -> str:
    """Extract the string value from an Enum member or return str(v)."""
    return v.value if isinstance(v, Enum) else str(v)
