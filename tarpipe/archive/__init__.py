"""Archive path handling.

- path_set: include/exclude paths and their argument rendering
"""

from .path_set import PathSet, normalize_path

__all__ = [
    "PathSet",
    "normalize_path",
]
