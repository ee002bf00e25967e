"""Program persistence store (``{name: {"cmd": ..., "desc": ...}}``)."""

from __future__ import annotations

import json
import shutil
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from ..constants import BACKUP_SUFFIX
from ..errors import CorruptionWarning, ProgramIOError, ValidationError
from ..log import logger
from ._base import JsonStore


# Marks an entry built in memory rather than read from a file
_UNSET: Any = object()


@dataclass
class Entry:
    """One stored program.

    A field is ``None`` when the key is missing from the file (or holds a
    non-string); Add and Edit always set both.  Entries read from disk keep
    their original JSON value in ``raw`` and are written back unchanged, so a
    save never drops data it did not understand.
    """

    command: str | None = None
    description: str | None = None
    raw: Any = field(default=_UNSET, compare=False, repr=False)

    @classmethod
    def from_json(cls, value: Any) -> Entry:
        """Build an entry from its on-disk object, tolerating missing keys."""
        if not isinstance(value, dict):
            return cls(raw=value)
        cmd = value.get("cmd")
        desc = value.get("desc")
        return cls(
            command=cmd if isinstance(cmd, str) else None,
            description=desc if isinstance(desc, str) else None,
            raw=value,
        )

    @classmethod
    def validate_json(cls, name: str, value: Any) -> Entry:
        """Like ``from_json`` but raise ``ValidationError`` on bad shapes."""
        if not isinstance(value, dict):
            raise ValidationError(f"Entry '{name}' must be a JSON object")
        for key in ("cmd", "desc"):
            if key in value and not isinstance(value[key], str):
                raise ValidationError(f"Entry '{name}': '{key}' must be a string")
        return cls.from_json(value)

    def to_json(self) -> Any:
        if self.raw is not _UNSET:
            return self.raw
        data: dict[str, str] = {}
        if self.command is not None:
            data["cmd"] = self.command
        if self.description is not None:
            data["desc"] = self.description
        return data


class ProgramStore(JsonStore):
    """The name -> Entry mapping backed by ``programs.json``.

    Construct once per invocation, call ``load()``, mutate through the
    mapping helpers, then ``save()``.  Insertion order is preserved and is
    the order listings show.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self._entries: dict[str, Entry] = {}
        self.backup_path: Path | None = None

    @property
    def backup_file(self) -> Path:
        return self.path.with_name(self.path.name + BACKUP_SUFFIX)

    def load(self) -> ProgramStore:
        """Load entries from disk, recovering from a corrupt file.

        A file that is not a JSON object is copied byte-for-byte to
        ``<path>.backup`` and the store starts empty.
        """
        self.ensure_exists()
        try:
            raw = self.load_raw()
            if not isinstance(raw, dict):
                raise ValueError(
                    f"top-level value is {type(raw).__name__}, expected object"
                )
        except (ValueError, UnicodeDecodeError) as exc:
            self._recover(exc)
            raw = {}
        self._entries = {str(name): Entry.from_json(value) for name, value in raw.items()}
        logger.debug("loaded %d program(s) from %s", len(self._entries), self.path)
        return self

    def _recover(self, exc: Exception) -> None:
        backup = self.backup_file
        try:
            shutil.copyfile(self.path, backup)
        except OSError as copy_exc:
            raise ProgramIOError(
                f"Cannot back up corrupted config to {backup}: {copy_exc}"
            ) from copy_exc
        self.backup_path = backup
        warnings.warn(
            f"Corrupted config {self.path} ({exc}); "
            f"backup saved to {backup}, starting fresh",
            CorruptionWarning,
            stacklevel=3,
        )

    def save(self) -> None:
        """Persist every entry to disk in one atomic rewrite."""
        self.save_raw(self.to_json())

    def to_json(self) -> dict[str, Any]:
        return {name: entry.to_json() for name, entry in self._entries.items()}

    # -- mapping helpers ------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, name: str) -> Entry | None:
        return self._entries.get(name)

    def items(self) -> list[tuple[str, Entry]]:
        return list(self._entries.items())

    def put(self, name: str, entry: Entry) -> bool:
        """Insert or replace *name*; return True if it already existed."""
        existed = name in self._entries
        self._entries[name] = entry
        return existed

    def delete(self, name: str) -> None:
        del self._entries[name]


def parse_import(text: str) -> dict[str, Entry]:
    """Parse an import document into entries (``ValidationError`` if malformed)."""
    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid JSON file: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValidationError("Invalid JSON file: expected an object of programs")
    return {str(name): Entry.validate_json(str(name), value) for name, value in raw.items()}
