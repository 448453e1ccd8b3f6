"""Shared helpers: logging setup and atomic file output."""

from .atomic_write import atomic_write, atomic_write_bytes
from .logging_config import ColoredFormatter, CSVFormatter, setup_logging

__all__ = [
    "atomic_write",
    "atomic_write_bytes",
    "ColoredFormatter",
    "CSVFormatter",
    "setup_logging",
]
