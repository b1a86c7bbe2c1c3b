"""
Validation of decoded state machine descriptions.

Pydantic already enforces field types; the checks here cover the semantic
invariants of a description. Checks run in a fixed order and the first
violation is raised; errors are not accumulated.
"""

import logging

from asmdgen.errors import ValidationError, ValidationErrorKind
from asmdgen.utils import is_vhdl_identifier

from .core import StateMachine

logger = logging.getLogger(__name__)


def validate(machine: StateMachine) -> None:
    """
    Check a raw (not yet normalized) description.

    Args:
        machine: Decoded state machine description

    Raises:
        ValidationError: On the first violated invariant
    """
    options = machine.options

    if not options.module_name.strip():
        raise ValidationError(
            ValidationErrorKind.MISSING_MODULE_NAME,
            "No module name specified (Options.ModuleName).",
        )

    entity_name = options.normalized_module_name
    if not is_vhdl_identifier(entity_name):
        raise ValidationError(
            ValidationErrorKind.INVALID_MODULE_NAME,
            f"Options.ModuleName '{options.module_name}' does not form a valid VHDL "
            f"identifier (got '{entity_name}').",
        )

    if options.clock_edge is None:
        raise ValidationError(
            ValidationErrorKind.INVALID_CLOCK_TYPE,
            f"Options.ClockType must be 'negedge' or 'posedge', not '{options.clock_type}'.",
        )

    # FirstState is not checked against a state set; states are not modeled yet.
    if not options.first_state.strip():
        raise ValidationError(
            ValidationErrorKind.MISSING_FIRST_STATE,
            "Options.FirstState not specified.",
        )

    if not machine.inputs:
        raise ValidationError(ValidationErrorKind.NO_INPUTS, "No inputs specified.")

    for name in machine.reserved_port_names:
        if name in machine.inputs or name in machine.outputs:
            raise ValidationError(
                ValidationErrorKind.RESERVED_PORT_NAME,
                f"Port name '{name}' is reserved for the generated clock/reset signals.",
            )

    for name in machine.outputs:
        if name in machine.inputs:
            raise ValidationError(
                ValidationErrorKind.DUPLICATE_PORT,
                f"Port '{name}' is declared both as an input and as an output.",
            )

    for section, variables in (
        ("Inputs", machine.inputs),
        ("Outputs", machine.outputs),
        ("Parameters", machine.parameters),
    ):
        for name in variables:
            if not is_vhdl_identifier(name):
                raise ValidationError(
                    ValidationErrorKind.INVALID_NAME,
                    f"{section}: '{name}' is not a valid VHDL identifier.",
                )

    logger.debug("Description '%s' passed validation", options.module_name)
