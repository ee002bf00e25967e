"""Persistence layer – each store owns its file path, data format, and I/O."""

from .programs import Entry, ProgramStore, parse_import

__all__ = [
    "Entry",
    "ProgramStore",
    "parse_import",
]
