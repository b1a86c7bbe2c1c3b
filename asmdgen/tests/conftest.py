import os
import sys

import pytest

# Add the project root to sys.path so that asmdgen is importable
# This is needed because of the flat layout structure
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from asmdgen.model import Options, StateMachine, Variable  # noqa: E402

COUNTER_YAML = """
Options:
  ModuleName: Counter
  ClockType: posedge
  FirstState: S0
  Author: Jane Doe
Inputs:
  en:
    BitWidth: 1
"""


@pytest.fixture
def counter_yaml():
    """YAML text of the basic counter description."""
    return COUNTER_YAML


@pytest.fixture
def counter_options():
    """Options of the basic counter description."""
    return Options(
        module_name="Counter", clock_type="posedge", first_state="S0", author="Jane Doe"
    )


@pytest.fixture
def counter_machine(counter_options):
    """Raw (not normalized) counter description with a single input."""
    return StateMachine(options=counter_options, inputs={"en": Variable(bit_width=1)})


@pytest.fixture
def write_description(tmp_path):
    """Write description text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "fsm.yml"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
