"""
Tests for the state machine Pydantic models.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from asmdgen.model import (
    ClockType,
    FunctionalUnit,
    Options,
    ResetPolicy,
    StateMachine,
    Variable,
)


class TestVariable:
    def test_defaults(self):
        var = Variable()
        assert var.bit_width == 1
        assert var.type == ""
        assert var.default_value == ""
        assert var.is_vector is False

    @pytest.mark.parametrize(
        "width, expected",
        [
            (1, "std_logic"),
            (2, "std_logic_vector (1 downto 0)"),
            (8, "std_logic_vector (7 downto 0)"),
            (32, "std_logic_vector (31 downto 0)"),
        ],
    )
    def test_vhdl_type_follows_width(self, width, expected):
        assert Variable(bit_width=width).vhdl_type == expected

    def test_explicit_std_logic_widens(self):
        assert Variable(bit_width=4, type="std_logic").vhdl_type == "std_logic_vector (3 downto 0)"

    def test_other_types_verbatim(self):
        assert Variable(type="integer").vhdl_type == "integer"
        assert Variable(bit_width=8, type="unsigned(7 downto 0)").vhdl_type == "unsigned(7 downto 0)"

    @pytest.mark.parametrize("type_", ["", "std_logic", "std_logic_vector", "unsigned", "std_ulogic"])
    def test_port_type_ignores_type(self, type_):
        assert Variable(bit_width=8, type=type_).port_type == "std_logic_vector (7 downto 0)"
        assert Variable(type=type_).port_type == "std_logic"

    def test_range_string(self):
        assert Variable(bit_width=1).range_string == ""
        assert Variable(bit_width=16).range_string == "15 downto 0"

    @pytest.mark.parametrize("width", [0, -3])
    def test_width_must_be_positive(self, width):
        with pytest.raises(PydanticValidationError):
            Variable(bit_width=width)

    def test_pascal_case_aliases(self):
        var = Variable.model_validate({"BitWidth": 4, "Type": "natural", "DefaultValue": 3})
        assert var.bit_width == 4
        assert var.type == "natural"
        assert var.default_value == "3"

    def test_boolean_default_becomes_vhdl_literal(self):
        assert Variable(type="boolean", default_value=True).default_value == "true"

    def test_unknown_field_rejected(self):
        with pytest.raises(PydanticValidationError):
            Variable.model_validate({"Bitwidth": 4})


class TestOptions:
    def test_normalized_module_name(self):
        assert Options(module_name="My Module-A").normalized_module_name == "MyModuleA"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("posedge", ClockType.POSEDGE),
            ("PosEdge", ClockType.POSEDGE),
            ("NEGEDGE", ClockType.NEGEDGE),
            (" negedge ", ClockType.NEGEDGE),
            ("rising", None),
            ("", None),
        ],
    )
    def test_clock_edge(self, raw, expected):
        assert Options(clock_type=raw).clock_edge is expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, ResetPolicy.UNSPECIFIED),
            (True, ResetPolicy.ENABLED),
            (False, ResetPolicy.DISABLED),
            ("false", ResetPolicy.DISABLED),
            ("Enabled", ResetPolicy.ENABLED),
        ],
    )
    def test_reset_policy_input(self, raw, expected):
        assert Options(add_async_reset=raw).add_async_reset is expected

    @pytest.mark.parametrize("field", ["module_name", "first_state", "author"])
    @pytest.mark.parametrize("text", ["Jane\nentity evil is", "Jane\r\nDoe"])
    def test_line_breaks_rejected(self, field, text):
        with pytest.raises(PydanticValidationError, match="single line"):
            Options(**{field: text})

    def test_reset_policy_rejects_garbage(self):
        with pytest.raises(PydanticValidationError):
            Options(add_async_reset="sometimes")

    def test_has_async_reset_defaults_true(self):
        assert Options().has_async_reset is True
        assert Options(add_async_reset=False).has_async_reset is False

    def test_numeric_first_state_coerced(self):
        assert Options.model_validate({"FirstState": 0}).first_state == "0"


class TestResetPolicy:
    def test_resolve(self):
        assert ResetPolicy.UNSPECIFIED.resolve() is ResetPolicy.ENABLED
        assert ResetPolicy.ENABLED.resolve() is ResetPolicy.ENABLED
        assert ResetPolicy.DISABLED.resolve() is ResetPolicy.DISABLED


class TestStateMachine:
    def test_empty_machine(self):
        machine = StateMachine()
        assert machine.inputs == {}
        assert machine.functional_units == {}

    def test_declaration_order_kept(self):
        machine = StateMachine.model_validate(
            {"Inputs": {"zeta": {}, "alpha": {}, "mid": {"BitWidth": 2}}}
        )
        assert list(machine.inputs) == ["zeta", "alpha", "mid"]

    def test_reserved_port_names(self, counter_machine):
        assert counter_machine.reserved_port_names == ["clk", "rst"]
        no_reset = counter_machine.model_copy(
            update={"options": counter_machine.options.model_copy(update={"add_async_reset": ResetPolicy.DISABLED})}
        )
        assert no_reset.reserved_port_names == ["clk"]

    def test_functional_units(self):
        machine = StateMachine.model_validate(
            {"FunctionalUnits": {"adder": {"Inputs": {"a": {"BitWidth": 8}}, "Outputs": {"s": {}}}}}
        )
        unit = machine.functional_units["adder"]
        assert isinstance(unit, FunctionalUnit)
        assert unit.inputs["a"].bit_width == 8
        assert unit.registers == {}
