"""Defaulting and derivation pass applied after validation."""

import logging

from .base import ResetPolicy
from .core import CLOCK_PORT, DEFAULT_INDENT, RESET_PORT, StateMachine
from .variable import Variable

logger = logging.getLogger(__name__)


def normalize(machine: StateMachine) -> StateMachine:
    """
    Resolve defaults and inject the clock/reset inputs.

    Returns a new model; ``machine`` is left untouched. Applying the function
    to its own result yields an equal model.

    Args:
        machine: Validated state machine description

    Returns:
        Normalized copy of the description
    """
    options = machine.options
    reset_policy = options.add_async_reset.resolve()

    resolved_options = options.model_copy(
        update={
            "clock_type": options.clock_type.strip().lower(),
            "add_async_reset": reset_policy,
            "indent": options.indent or DEFAULT_INDENT,
        }
    )

    inputs = {name: var.model_copy() for name, var in machine.inputs.items()}
    inputs[CLOCK_PORT] = Variable(bit_width=1)
    if reset_policy is ResetPolicy.ENABLED:
        inputs[RESET_PORT] = Variable(bit_width=1)

    logger.debug(
        "Normalized '%s': entity=%s, async_reset=%s, inputs=%s",
        options.module_name,
        resolved_options.normalized_module_name,
        reset_policy.value,
        list(inputs),
    )

    return machine.model_copy(
        deep=True, update={"options": resolved_options, "inputs": inputs}
    )
