"""DTO describing one external process in a pipeline."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Iterable

from tarpipe.exceptions import InvalidStageError


@dataclass(frozen=True)
class CommandStage:
    """Immutable program invocation plus the exit codes treated as success."""

    program: str
    args: tuple[str, ...] = ()
    accepted_exit_codes: frozenset[int] = field(default_factory=lambda: frozenset({0}))

    def __post_init__(self) -> None:
        """Normalize collections and validate the stage."""
        if not self.program:
            raise InvalidStageError("A command stage requires a program.")
        object.__setattr__(self, "args", tuple(str(arg) for arg in self.args))
        codes = frozenset(int(code) for code in self.accepted_exit_codes)
        if not codes:
            raise InvalidStageError(
                f"Stage '{self.program}' must accept at least one exit code."
            )
        object.__setattr__(self, "accepted_exit_codes", codes)

    @classmethod
    def from_argv(
        cls, argv: Iterable[str], accepted_exit_codes: Iterable[int] = (0,)
    ) -> "CommandStage":
        """Build a stage from a full argument vector."""
        argv = list(argv)
        if not argv:
            raise InvalidStageError("A command stage requires a program.")
        return cls(
            program=argv[0],
            args=tuple(argv[1:]),
            accepted_exit_codes=frozenset(accepted_exit_codes),
        )

    @property
    def argv(self) -> list[str]:
        """Full argument vector handed to the OS."""
        return [self.program, *self.args]

    @property
    def command_line(self) -> str:
        """Shell-quoted display form of the invocation."""
        return shlex.join(self.argv)

    def accepts(self, exit_code: int) -> bool:
        return exit_code in self.accepted_exit_codes
