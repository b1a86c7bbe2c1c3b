"""Typing protocols for generator output."""

from typing import Optional, Protocol


class TextSink(Protocol):
    """Anything generated text can be written to (files, ``io.StringIO``, ...).

    ``write`` returns the number of characters written, or None when the
    sink does not report it.
    """

    def write(self, s: str) -> Optional[int]:
        ...
