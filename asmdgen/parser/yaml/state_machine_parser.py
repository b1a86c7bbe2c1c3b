"""
YAML parser for state machine descriptions.

Loads YAML (or JSON, which YAML accepts) and converts it to the canonical
Pydantic model. Decoding errors are reported as ``DecodeError`` with file
and line information where available.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from asmdgen.errors import DecodeError
from asmdgen.model import (
    FunctionalUnit,
    Options,
    StateMachine,
    Variable,
    normalize,
    validate,
)

logger = logging.getLogger(__name__)


def _format_validation_error(e: ValidationError) -> str:
    """Flatten pydantic errors into ``loc -> loc: msg`` lines."""
    errors = []
    for error in e.errors():
        loc = " -> ".join(str(x) for x in error["loc"])
        errors.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "\n  ".join(errors)


class YamlStateMachineParser:
    """
    Parser for state machine YAML descriptions.

    Handles:
    - File and string payloads
    - Null variable bodies (``en:`` means all defaults)
    - Conversion of pydantic errors to ``DecodeError``
    """

    VARIABLE_SECTIONS = ("Inputs", "Outputs", "Parameters", "Registers")
    UNIT_SECTIONS = ("Inputs", "Outputs", "Registers")
    TOP_LEVEL_KEYS = ("Options", *VARIABLE_SECTIONS, "FunctionalUnits")

    def parse_file(self, file_path: Union[str, Path]) -> StateMachine:
        """
        Parse a state machine description file.

        Args:
            file_path: Path to the YAML/JSON description

        Returns:
            StateMachine: Decoded (not yet validated) description

        Raises:
            DecodeError: If the file is missing or cannot be decoded
        """
        file_path = Path(file_path).resolve()

        if not file_path.exists():
            raise DecodeError(f"File not found: {file_path}")

        logger.info("Parsing state machine description %s", file_path)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return self._parse_text(f, file_path)
        except UnicodeDecodeError as e:
            raise DecodeError(f"File is not valid UTF-8: {e}", file_path) from e
        except OSError as e:
            raise DecodeError(f"Cannot read file: {e}", file_path) from e

    def parse_string(self, text: str, source: Optional[Path] = None) -> StateMachine:
        """Parse a description held in memory; ``source`` is only used in errors."""
        return self._parse_text(text, source)

    def load(self, file_path: Union[str, Path]) -> StateMachine:
        """
        Parse, validate and normalize a description file.

        Raises:
            DecodeError: If the payload cannot be decoded
            asmdgen.errors.ValidationError: If an invariant is violated
        """
        machine = self.parse_file(file_path)
        validate(machine)
        return normalize(machine)

    def _parse_text(self, stream: Any, file_path: Optional[Path]) -> StateMachine:
        try:
            data = yaml.safe_load(stream)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line_num = mark.line + 1 if mark else None
            raise DecodeError(f"YAML syntax error: {e}", file_path, line_num) from e

        if not isinstance(data, dict):
            raise DecodeError("Root element must be a YAML object/dictionary", file_path)

        return self._parse_state_machine(data, file_path)

    def _parse_state_machine(
        self, data: Dict[str, Any], file_path: Optional[Path]
    ) -> StateMachine:
        """Parse the top-level description structure."""
        unknown = [str(key) for key in data if key not in self.TOP_LEVEL_KEYS]
        if unknown:
            raise DecodeError(
                f"Unknown top-level field(s): {', '.join(unknown)}. "
                f"Expected: {', '.join(self.TOP_LEVEL_KEYS)}",
                file_path,
            )

        options = self._parse_options(data.get("Options"), file_path)
        sections = {
            section: self._parse_variables(data.get(section), section, file_path)
            for section in self.VARIABLE_SECTIONS
        }
        units = self._parse_functional_units(data.get("FunctionalUnits"), file_path)

        machine = StateMachine(
            options=options,
            inputs=sections["Inputs"],
            outputs=sections["Outputs"],
            parameters=sections["Parameters"],
            registers=sections["Registers"],
            functional_units=units,
        )
        logger.debug(
            "Decoded '%s': %d input(s), %d output(s), %d parameter(s)",
            options.module_name,
            len(machine.inputs),
            len(machine.outputs),
            len(machine.parameters),
        )
        return machine

    def _parse_options(self, data: Any, file_path: Optional[Path]) -> Options:
        """Parse the Options block; a missing block yields all defaults."""
        if data is None:
            return Options()
        if not isinstance(data, dict):
            raise DecodeError("Options must be a mapping", file_path)
        try:
            return Options.model_validate(data)
        except ValidationError as e:
            raise DecodeError(
                f"Error parsing Options:\n  {_format_validation_error(e)}", file_path
            ) from e

    def _parse_variables(
        self, data: Any, section: str, file_path: Optional[Path]
    ) -> Dict[str, Variable]:
        """Parse a name -> Variable mapping, keeping declaration order."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(f"{section} must be a mapping of names to definitions", file_path)

        variables: Dict[str, Variable] = {}
        for name, body in data.items():
            if not isinstance(name, str) or not name.strip():
                raise DecodeError(f"{section}: invalid name {name!r}", file_path)
            if body is None:
                body = {}
            if not isinstance(body, dict):
                raise DecodeError(f"{section}[{name}] must be a mapping", file_path)
            try:
                variables[name] = Variable.model_validate(body)
            except ValidationError as e:
                raise DecodeError(
                    f"Error parsing {section}[{name}]:\n  {_format_validation_error(e)}",
                    file_path,
                ) from e
        return variables

    def _parse_functional_units(
        self, data: Any, file_path: Optional[Path]
    ) -> Dict[str, FunctionalUnit]:
        """Parse functional unit definitions."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError("FunctionalUnits must be a mapping", file_path)

        units: Dict[str, FunctionalUnit] = {}
        for name, body in data.items():
            body = body or {}
            if not isinstance(body, dict):
                raise DecodeError(f"FunctionalUnits[{name}] must be a mapping", file_path)
            unknown = [str(key) for key in body if key not in self.UNIT_SECTIONS]
            if unknown:
                raise DecodeError(
                    f"FunctionalUnits[{name}]: unknown field(s): {', '.join(unknown)}",
                    file_path,
                )
            units[name] = FunctionalUnit(
                inputs=self._parse_variables(
                    body.get("Inputs"), f"FunctionalUnits[{name}].Inputs", file_path
                ),
                outputs=self._parse_variables(
                    body.get("Outputs"), f"FunctionalUnits[{name}].Outputs", file_path
                ),
                registers=self._parse_variables(
                    body.get("Registers"), f"FunctionalUnits[{name}].Registers", file_path
                ),
            )
        return units
