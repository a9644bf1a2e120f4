"""Base class for compressors that extend an archive pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from tarpipe.application.config.utilities import UtilityResolver

CompressionPass = tuple[list[str], str]
PassCallback = Callable[[list[str], str], None]


def validate_level(level: int | None) -> int | None:
    """Return ``level`` unchanged if it is None or within 1-9."""
    if level is None:
        return None
    if not isinstance(level, int) or isinstance(level, bool) or not 1 <= level <= 9:
        raise ValueError(f"Compression level must be between 1 and 9, got {level!r}")
    return level


class Compressor(ABC):
    """A source of one or more compression passes.

    Each pass is an argument vector that reads stdin and writes stdout,
    paired with the extension suffix it adds (e.g. ``".gz"``).
    """

    def __init__(self, utilities: UtilityResolver | None = None) -> None:
        self._utilities = utilities or UtilityResolver()

    @abstractmethod
    def passes(self) -> list[CompressionPass]:
        """Return the (argv, extension) pairs, in application order."""
        pass

    def compress_with(self, callback: PassCallback) -> None:
        """Invoke ``callback(argv, extension)`` once per pass, in order."""
        for argv, extension in self.passes():
            callback(list(argv), extension)


class Chain(Compressor):
    """Apply several compressors one after another."""

    def __init__(self, *compressors: Compressor) -> None:
        super().__init__()
        if not compressors:
            raise ValueError("Chain requires at least one compressor")
        self._compressors = compressors

    def passes(self) -> list[CompressionPass]:
        result: list[CompressionPass] = []
        for compressor in self._compressors:
            result.extend(compressor.passes())
        return result
