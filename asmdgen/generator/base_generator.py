"""
Base generator interface for HDL code generation.

Provides the template environment and the output plumbing shared by
language-specific generators. A generator renders a normalized
``StateMachine`` into an ordered list of text blocks; this class takes care
of joining them, writing them to a sink, and persisting them to a file
without leaving partial artifacts behind.
"""

import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from jinja2 import Environment, FileSystemLoader

from asmdgen.errors import RenderError
from asmdgen.model import StateMachine

from ._protocols import TextSink

logger = logging.getLogger(__name__)


def _output_mode(file_path: Path) -> int:
    """Permission bits for a new output: the existing file's, or 0666 minus umask."""
    try:
        return stat.S_IMODE(file_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class BaseGenerator(ABC):
    """
    Abstract base class for HDL code generators.

    Subclasses implement ``render_blocks``. Templates are loaded from a
    'templates' subdirectory.
    """

    file_extension = ".txt"

    def __init__(self, template_dir: Optional[str] = None):
        """
        Initialize the generator with Jinja2 environment.

        Args:
            template_dir: Optional custom template directory.
                Defaults to 'templates' subdirectory of concrete generator.
        """
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    @abstractmethod
    def render_blocks(self, machine: StateMachine, today: Optional[date] = None) -> List[str]:
        """
        Render the output as an ordered list of text blocks.

        Args:
            machine: Normalized state machine
            today: Date for the header comment (defaults to the current date)

        Returns:
            Text blocks in output order

        Raises:
            RenderError: If the model is inconsistent
        """
        pass

    def generate(self, machine: StateMachine, today: Optional[date] = None) -> str:
        """Render the complete output text."""
        return "".join(self.render_blocks(machine, today))

    def default_filename(self, machine: StateMachine) -> str:
        """Output file name derived from the entity name."""
        return f"{machine.options.normalized_module_name}{self.file_extension}"

    def write(self, machine: StateMachine, sink: TextSink, today: Optional[date] = None) -> int:
        """
        Render and write every block to ``sink`` in order.

        Nothing is written if rendering fails. A write failure aborts
        immediately; the caller should discard whatever reached the sink.

        Returns:
            Number of characters written

        Raises:
            RenderError: On rendering faults or sink write failures
        """
        blocks = self.render_blocks(machine, today)
        total = 0
        for block in blocks:
            total += self._write(sink, block)
        return total

    def write_file(
        self, machine: StateMachine, file_path: Union[str, Path], today: Optional[date] = None
    ) -> Path:
        """
        Render and write the output to ``file_path``.

        The text goes to a temporary file in the destination directory that
        is moved into place only after every block was written. On failure
        the temporary file is removed and any existing file is left as is.
        The result gets the usual permissions of a newly created file, or keeps
        those of the file it replaces.

        Returns:
            Path of the written file

        Raises:
            RenderError: On rendering faults or I/O failures
        """
        file_path = Path(file_path)
        blocks = self.render_blocks(machine, today)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent
            )
        except OSError as e:
            raise RenderError(f"Cannot create output in {file_path.parent}: {e}") from e

        tmp_path = Path(tmp_name)
        committed = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                for block in blocks:
                    self._write(f, block)
            os.chmod(tmp_path, _output_mode(file_path))
            os.replace(tmp_path, file_path)
            committed = True
        except OSError as e:
            raise RenderError(f"Failed to write {file_path}: {e}") from e
        finally:
            if not committed:
                tmp_path.unlink(missing_ok=True)

        logger.info("Wrote %s", file_path)
        return file_path

    @staticmethod
    def _write(sink: TextSink, text: str) -> int:
        """Write one block, turning I/O failures and short writes into ``RenderError``."""
        try:
            written = sink.write(text)
        except OSError as e:
            raise RenderError(f"Failed to write output: {e}") from e
        if written is not None and written != len(text):
            raise RenderError(
                f"Unable to write full string to output ({written} of {len(text)} characters)"
            )
        return len(text)
