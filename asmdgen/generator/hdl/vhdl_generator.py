"""
VHDL generator for state machine skeletons.

Renders a normalized state machine as a fixed sequence of blocks:
header comment, library clauses, entity (generics and ports), and the
``Behavioral`` architecture with the clocked state-register process.
Next-state and output logic are not generated.
"""

import logging
import os
from datetime import date
from typing import Any, Dict, List, Optional

from asmdgen.errors import RenderError
from asmdgen.generator.base_generator import BaseGenerator
from asmdgen.model import CLOCK_PORT, RESET_PORT, Options, StateMachine

logger = logging.getLogger(__name__)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_header_date(d: date) -> str:
    """Format a date as '2 Jan 2006' independent of the locale."""
    return f"{d.day} {_MONTHS[d.month - 1]} {d.year}"


class VhdlStateMachineGenerator(BaseGenerator):
    """VHDL entity/architecture generator for state machines."""

    file_extension = ".vhd"

    HEADER_RULE = "-" * 80

    # Fixed library clauses; not inferred from the types in use.
    LIBRARIES = [
        ("IEEE", ["IEEE.STD_LOGIC_1164.ALL", "IEEE.NUMERIC_STD.ALL"]),
    ]

    BLOCK_TEMPLATES = (
        "header.vhdl.j2",
        "libraries.vhdl.j2",
        "entity.vhdl.j2",
        "architecture.vhdl.j2",
    )

    def __init__(self, template_dir: Optional[str] = None):
        """Initialize VHDL generator with templates."""
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")
        super().__init__(template_dir)

    def _prepare_generics(self, machine: StateMachine) -> List[Dict[str, Any]]:
        """Prepare generics (parameters) for templates."""
        return [
            {
                "name": name,
                "type": param.vhdl_type,
                "default_value": param.default_value,
            }
            for name, param in machine.parameters.items()
        ]

    def _prepare_ports(self, machine: StateMachine) -> List[Dict[str, Any]]:
        """Prepare ports: inputs first, then outputs, as one list."""
        ports = []
        for direction, variables in (("in", machine.inputs), ("out", machine.outputs)):
            for name, var in variables.items():
                ports.append({"name": name, "direction": direction, "type": var.port_type})
        return ports

    def _clock_condition(self, options: Options) -> str:
        """VHDL condition for the active clock edge."""
        edge = options.clock_edge
        if edge is None:
            # validate() rejects this; reaching it means the model was not validated
            raise RenderError(f"Unrecognized clock type: {options.clock_type}")
        return f"{CLOCK_PORT}'event and {CLOCK_PORT}='{edge.vhdl_level}'"

    def _get_template_context(
        self, machine: StateMachine, today: Optional[date] = None
    ) -> Dict[str, Any]:
        """Build common template context."""
        options = machine.options
        async_reset = options.has_async_reset
        sensitivity = [CLOCK_PORT, RESET_PORT] if async_reset else [CLOCK_PORT]

        return {
            "module_name": options.module_name,
            "entity_name": options.normalized_module_name,
            "author": options.author,
            "date": format_header_date(today or date.today()),
            "rule": self.HEADER_RULE,
            "libraries": self.LIBRARIES,
            "indent": options.indent,
            "generics": self._prepare_generics(machine),
            "ports": self._prepare_ports(machine),
            "first_state": options.first_state,
            "async_reset": async_reset,
            "reset_port": RESET_PORT,
            "sensitivity": sensitivity,
            "clock_condition": self._clock_condition(options),
        }

    def render_blocks(self, machine: StateMachine, today: Optional[date] = None) -> List[str]:
        """Render header, libraries, entity and architecture blocks."""
        if CLOCK_PORT not in machine.inputs or not machine.options.indent:
            raise RenderError(
                f"State machine '{machine.options.module_name}' has not been normalized"
            )
        if machine.options.has_async_reset and RESET_PORT not in machine.inputs:
            raise RenderError(
                f"State machine '{machine.options.module_name}' enables the asynchronous "
                f"reset but has no '{RESET_PORT}' input"
            )

        context = self._get_template_context(machine, today)
        if machine.functional_units:
            logger.debug(
                "Functional units are not rendered: %s", ", ".join(machine.functional_units)
            )

        logger.debug("Rendering entity %s", context["entity_name"])
        return [self.env.get_template(name).render(**context) for name in self.BLOCK_TEMPLATES]
