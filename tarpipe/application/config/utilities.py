"""Resolution of external utility executables."""

from __future__ import annotations

import logging
import shutil
from typing import Mapping

logger = logging.getLogger(__name__)


class UtilityResolver:
    """Map utility names such as ``tar`` or ``gzip`` to executables."""

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._overrides = dict(overrides or {})

    def utility(self, name: str) -> str:
        """Return the configured path, the PATH match, or the bare name.

        An unresolved name is returned unchanged so the stage using it fails
        to launch and is reported with the rest of the pipeline.
        """
        configured = self._overrides.get(name)
        if configured:
            return configured
        found = shutil.which(name)
        if found:
            return found
        logger.warning(f"Utility '{name}' was not found on PATH")
        return name
