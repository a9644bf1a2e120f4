"""DTO capturing how a single pipeline stage ended."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StageStatus:
    """Exit code and collected stderr for one stage."""

    index: int
    command_line: str
    exit_code: int
    stderr_text: str
    accepted_exit_codes: frozenset[int]
    launched: bool = True

    @property
    def succeeded(self) -> bool:
        return self.launched and self.exit_code in self.accepted_exit_codes

    @property
    def label(self) -> str:
        return f"stage {self.index} ({self.command_line})"
