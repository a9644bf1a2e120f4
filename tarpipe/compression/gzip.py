"""gzip compression pass."""

from __future__ import annotations

from tarpipe.application.config.utilities import UtilityResolver
from tarpipe.compression.base import CompressionPass, Compressor, validate_level


class Gzip(Compressor):
    """Pipe the archive through ``gzip``.

    Args:
        level: 1 (fastest) to 9 (best); gzip's own default when None
        rsyncable: Pass ``--rsyncable`` so rsync can transfer diffs
    """

    extension = ".gz"

    def __init__(
        self,
        level: int | None = None,
        rsyncable: bool = False,
        utilities: UtilityResolver | None = None,
    ) -> None:
        super().__init__(utilities)
        self.level = validate_level(level)
        self.rsyncable = rsyncable

    def passes(self) -> list[CompressionPass]:
        argv = [self._utilities.utility("gzip")]
        if self.level is not None:
            argv.append(f"-{self.level}")
        if self.rsyncable:
            argv.append("--rsyncable")
        return [(argv, self.extension)]
