"""Compressors that append passes to an archive pipeline.

- base: Compressor protocol and Chain for multi-pass compression
- gzip / bzip2: standard compressors
- custom: arbitrary user command
"""

from .base import Chain, Compressor
from .bzip2 import Bzip2
from .custom import Custom
from .gzip import Gzip

__all__ = [
    "Bzip2",
    "Chain",
    "Compressor",
    "Custom",
    "Gzip",
]
