"""bzip2 compression pass."""

from __future__ import annotations

from tarpipe.application.config.utilities import UtilityResolver
from tarpipe.compression.base import CompressionPass, Compressor, validate_level


class Bzip2(Compressor):
    """Pipe the archive through ``bzip2``."""

    extension = ".bz2"

    def __init__(
        self,
        level: int | None = None,
        utilities: UtilityResolver | None = None,
    ) -> None:
        super().__init__(utilities)
        self.level = validate_level(level)

    def passes(self) -> list[CompressionPass]:
        argv = [self._utilities.utility("bzip2")]
        if self.level is not None:
            argv.append(f"-{self.level}")
        return [(argv, self.extension)]
