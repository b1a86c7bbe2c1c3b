"""Tests for the normalization pass."""

from asmdgen.model import (
    CLOCK_PORT,
    DEFAULT_INDENT,
    RESET_PORT,
    Options,
    ResetPolicy,
    StateMachine,
    Variable,
    normalize,
)


class TestNormalize:
    def test_injects_clock_and_reset_by_default(self, counter_machine):
        normalized = normalize(counter_machine)
        assert list(normalized.inputs) == ["en", CLOCK_PORT, RESET_PORT]
        assert normalized.inputs[CLOCK_PORT].bit_width == 1
        assert normalized.inputs[RESET_PORT].bit_width == 1
        assert normalized.options.add_async_reset is ResetPolicy.ENABLED

    def test_reset_disabled_never_injects_reset(self, counter_machine):
        options = counter_machine.options.model_copy(
            update={"add_async_reset": ResetPolicy.DISABLED}
        )
        normalized = normalize(counter_machine.model_copy(update={"options": options}))
        assert list(normalized.inputs) == ["en", CLOCK_PORT]
        assert normalized.options.add_async_reset is ResetPolicy.DISABLED

    def test_idempotent(self, counter_machine):
        once = normalize(counter_machine)
        twice = normalize(once)
        assert twice == once
        assert list(twice.inputs) == ["en", CLOCK_PORT, RESET_PORT]
        assert twice.inputs[CLOCK_PORT].bit_width == 1

    def test_does_not_mutate_input(self, counter_machine):
        before = counter_machine.model_dump()
        normalize(counter_machine)
        assert counter_machine.model_dump() == before
        assert CLOCK_PORT not in counter_machine.inputs
        assert counter_machine.options.add_async_reset is ResetPolicy.UNSPECIFIED

    def test_result_does_not_share_variables(self, counter_machine):
        normalized = normalize(counter_machine)
        assert normalized.inputs["en"] is not counter_machine.inputs["en"]

    def test_default_indent(self, counter_machine):
        assert counter_machine.options.indent == ""
        assert normalize(counter_machine).options.indent == DEFAULT_INDENT

    def test_custom_indent_kept(self):
        machine = StateMachine(options=Options(indent="\t"), inputs={"a": Variable()})
        assert normalize(machine).options.indent == "\t"

    def test_clock_type_folded(self):
        machine = StateMachine(options=Options(clock_type=" NegEdge "), inputs={"a": Variable()})
        assert normalize(machine).options.clock_type == "negedge"

    def test_normalized_module_name(self):
        machine = StateMachine(options=Options(module_name="My Module-A"), inputs={"a": Variable()})
        assert normalize(machine).options.normalized_module_name == "MyModuleA"

    def test_other_sections_untouched(self, counter_options):
        machine = StateMachine(
            options=counter_options,
            inputs={"a": Variable()},
            outputs={"q": Variable(bit_width=4)},
            parameters={"WIDTH": Variable(type="integer", default_value="8")},
        )
        normalized = normalize(machine)
        assert normalized.outputs == machine.outputs
        assert normalized.parameters == machine.parameters
