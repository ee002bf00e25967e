"""Base JSON persistence store."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from ..constants import JSON_INDENT
from ..errors import ProgramIOError
from ..log import logger


def dump_json(data: Any) -> str:
    """Serialize *data* the way every om file is written."""
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False) + "\n"


def _target_mode(path: Path) -> int:
    """Permission bits a rewrite of *path* should keep.

    The existing file's mode, or the umask default for a new file.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class JsonStore:
    """JSON file store with atomic write.

    ``load_raw`` hands back whatever is in the file and leaves recovery from
    bad content to the subclass; ``save_raw`` replaces the whole file in one
    rename so a crash never leaves a half-written document behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -- core I/O -------------------------------------------------------------

    def ensure_exists(self) -> None:
        """Create the parent directory and an empty-state file if missing."""
        try:
            if not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                logger.info("Created config directory: %s", self.path.parent)
            if not self.path.exists():
                self.path.write_text(dump_json(self._default()), encoding="utf-8")
                logger.info("Created config file: %s", self.path)
        except OSError as exc:
            raise ProgramIOError(f"Cannot create {self.path}: {exc}") from exc

    def read_bytes(self) -> bytes:
        """Return the raw file contents (``ProgramIOError`` if unreadable)."""
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise ProgramIOError(f"Cannot open {self.path}: {exc}") from exc

    def load_raw(self) -> Any:
        """Read and parse the JSON file.

        Returns ``_default()`` when the file does not exist.  Invalid JSON
        propagates as ``json.JSONDecodeError`` (a ``ValueError``).
        """
        if not self.path.exists():
            return self._default()
        return json.loads(self.read_bytes().decode("utf-8"))

    def save_raw(self, data: Any) -> None:
        """Atomically write *data* as pretty-printed JSON, creating parents."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            mode = _target_mode(self.path)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(dump_json(data))
                # mkstemp creates 0600 files
                os.chmod(tmp_name, mode)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ProgramIOError(f"Cannot write to {self.path}: {exc}") from exc
        logger.info("Config saved to: %s", self.path)

    # -- override point -------------------------------------------------------

    def _default(self) -> Any:  # noqa: PLR6301
        """Return the empty-state value for this store (dict by default)."""
        return {}
