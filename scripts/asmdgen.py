#!/usr/bin/env python3
"""
asmdgen - VHDL state machine skeleton generator.

Usage:
    python scripts/asmdgen.py generate counter.fsm.yml --output ./rtl
    python scripts/asmdgen.py generate counter.fsm.yml --stdout
    python scripts/asmdgen.py validate counter.fsm.yml --json
    python scripts/asmdgen.py schema --output state_machine.schema.json

Subcommands:
    generate    Generate VHDL from a state machine description
    validate    Decode and validate a description without generating
    schema      Print the JSON Schema of the description format
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from asmdgen.errors import AsmdError, ValidationError
from asmdgen.generator.hdl import VhdlStateMachineGenerator
from asmdgen.model import StateMachine, validate
from asmdgen.parser import YamlStateMachineParser
from asmdgen.utils import enum_value


def log(msg: str, use_progress: bool, use_json: bool):
    """Output progress message if enabled."""
    if use_progress and use_json:
        print(f"PROGRESS: {msg}", flush=True)
    elif use_progress:
        print(msg)


def report_error(e: Exception, use_json: bool):
    """Print a failure and exit with status 1."""
    if use_json:
        payload = {"success": False, "error": str(e), "type": type(e).__name__}
        if isinstance(e, ValidationError):
            payload["kind"] = enum_value(e.kind)
        print(json.dumps(payload))
    else:
        print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


def resolve_output_path(args, generator: VhdlStateMachineGenerator, machine) -> Path:
    """Output file: --output (file or directory) or <entity>.vhd next to the input."""
    default_name = generator.default_filename(machine)
    if not args.output:
        return Path(args.input).parent / default_name
    output = Path(args.output)
    if output.is_dir() or args.output.endswith(("/", "\\")):
        return output / default_name
    return output


def cmd_generate(args):
    """Generate VHDL from a state machine description."""
    try:
        log("Parsing state machine description...", args.progress, args.json)
        machine = YamlStateMachineParser().load(args.input)

        generator = VhdlStateMachineGenerator()
        if args.stdout:
            generator.write(machine, sys.stdout)
            return

        output_path = resolve_output_path(args, generator, machine)
        log(f"Generating {output_path.name}...", args.progress, args.json)
        written = generator.write_file(machine, output_path)
        log("Generation complete!", args.progress, args.json)

        if args.json:
            print(
                json.dumps(
                    {
                        "success": True,
                        "output": str(written),
                        "entity": machine.options.normalized_module_name,
                    }
                )
            )
        else:
            print(f"✓ Generated: {written}")

    except AsmdError as e:
        report_error(e, args.json)


def cmd_validate(args):
    """Decode and validate a description."""
    try:
        machine = YamlStateMachineParser().parse_file(args.input)
        validate(machine)
    except AsmdError as e:
        report_error(e, args.json)

    entity = machine.options.normalized_module_name
    if args.json:
        print(json.dumps({"success": True, "entity": entity}))
    else:
        print(f"✓ {args.input} is valid (entity {entity})")


def cmd_schema(args):
    """Emit the JSON Schema of the description format."""
    schema = json.dumps(StateMachine.model_json_schema(by_alias=True), indent=2) + "\n"
    if args.output:
        try:
            Path(args.output).write_text(schema)
        except OSError as e:
            report_error(e, use_json=False)
        print(f"Generated {args.output}")
    else:
        sys.stdout.write(schema)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asmdgen", description="VHDL state machine skeleton generator"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate subcommand
    gen_parser = subparsers.add_parser("generate", help="Generate VHDL from a description")
    gen_parser.add_argument("input", help="State machine description (YAML or JSON)")
    gen_parser.add_argument(
        "--output", "-o", help="Output file or directory (default: <entity>.vhd next to input)"
    )
    gen_parser.add_argument(
        "--stdout", action="store_true", help="Write VHDL to standard output instead of a file"
    )
    gen_parser.add_argument("--json", action="store_true", help="JSON output")
    gen_parser.add_argument("--progress", action="store_true", help="Enable progress output")
    gen_parser.set_defaults(func=cmd_generate)

    # validate subcommand
    val_parser = subparsers.add_parser("validate", help="Validate a description")
    val_parser.add_argument("input", help="State machine description (YAML or JSON)")
    val_parser.add_argument("--json", action="store_true", help="JSON output")
    val_parser.set_defaults(func=cmd_validate)

    # schema subcommand
    schema_parser = subparsers.add_parser("schema", help="Print the description JSON Schema")
    schema_parser.add_argument("--output", "-o", help="Write the schema to this file")
    schema_parser.set_defaults(func=cmd_schema)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
