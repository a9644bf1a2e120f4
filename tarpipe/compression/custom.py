"""User-supplied compression command."""

from __future__ import annotations

import shlex

from tarpipe.application.config.utilities import UtilityResolver
from tarpipe.compression.base import CompressionPass, Compressor


class Custom(Compressor):
    """Run an arbitrary stdin-to-stdout command, e.g. ``xz -T0``.

    The first word of ``command`` is resolved like any other utility.
    """

    def __init__(
        self,
        command: str,
        extension: str,
        utilities: UtilityResolver | None = None,
    ) -> None:
        super().__init__(utilities)
        words = shlex.split(command or "")
        if not words:
            raise ValueError("Custom compressor requires a command")
        extension = (extension or "").strip()
        if not extension.lstrip("."):
            raise ValueError("Custom compressor requires an extension")
        self.command = words
        self.extension = extension if extension.startswith(".") else f".{extension}"

    def passes(self) -> list[CompressionPass]:
        program, *args = self.command
        return [([self._utilities.utility(program), *args], self.extension)]
