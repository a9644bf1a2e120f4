"""Shared fixtures for tarpipe tests."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

from tarpipe.application.dto.command_stage import CommandStage


@pytest.fixture
def py_stage() -> Callable[..., CommandStage]:
    """Build a stage running a snippet of Python with this interpreter."""

    def _make(code: str, accepted: Iterable[int] = (0,)) -> CommandStage:
        return CommandStage(
            program=sys.executable,
            args=("-c", code),
            accepted_exit_codes=frozenset(accepted),
        )

    return _make


@pytest.fixture
def fake_tool(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write an executable Python script standing in for an external tool."""
    if os.name != "posix":
        pytest.skip("executable scripts require a POSIX system")

    def _make(name: str, body: str) -> Path:
        script = tmp_path / "bin" / name
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(f"#!{sys.executable}\nimport sys\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make
