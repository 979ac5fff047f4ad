"""
DataLocation: a filesystem location (a single file or a directory of files)
plus an optional file name pattern, resolved on demand into the concrete files
to read, newest first.
"""

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from localfile.errors import LocalFileError, StaleLocationError

log = logging.getLogger(__name__)

MATCH_ALL = ".*"


class DataLocation:
    """
    A validated data location.

    `pattern=None` means "no pattern". For a directory this becomes the
    match-all pattern `.*`; for a plain file it stays `None` and the file itself
    is the only data file. Supplying a pattern for a missing path creates the
    directory (and its parents).
    """

    __slots__ = ("_location", "_pattern", "_compiled_pattern")

    def __init__(
        self, location: str | os.PathLike[str] | None, pattern: str | None = None
    ) -> None:
        if location is None:
            raise ValueError("location is null")
        if not isinstance(pattern, (str, type(None))):
            raise ValueError(f"pattern must be a string or None, not {type(pattern).__name__}")
        if not os.fspath(location):
            raise ValueError("location is empty")

        path = Path(location)
        if not path.exists() and pattern is not None:
            log.info("Creating data directory %s", path)
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ValueError(f"location does not exist: {path}") from e

        if not path.exists():
            raise ValueError("location does not exist")
        if pattern is not None and not path.is_dir():
            raise ValueError("pattern may be specified only if location is a directory")

        is_dir = path.is_dir()
        self._location: Path = path
        self._pattern: str | None = MATCH_ALL if pattern is None and is_dir else pattern
        self._compiled_pattern: re.Pattern[str] | None = (
            _compile(MATCH_ALL if pattern is None else pattern) if is_dir else None
        )

    @property
    def location(self) -> Path:
        return self._location

    @property
    def pattern(self) -> str | None:
        return self._pattern

    def files(self) -> tuple[Path, ...]:
        """
        List the data files at this location, most recently modified first.

        A file location yields just itself. A directory location yields the
        entries whose name fully matches the pattern. The location is re-checked
        on every call since it may have changed since construction.
        """
        location = self._location
        if not location.exists():
            raise StaleLocationError(f"location {location} doesn't exist")
        if self._pattern is None:
            return (location,)

        if not location.is_dir():
            raise StaleLocationError(f"location {location} is not a directory")
        assert self._compiled_pattern is not None
        try:
            names = os.listdir(location)
        except OSError as e:
            raise LocalFileError(f"Failed to list files at {location}") from e

        matched = [location / name for name in names if self._compiled_pattern.fullmatch(name)]
        # Stable sort, so entries with equal mtimes keep listing order.
        matched.sort(key=_last_modified, reverse=True)
        log.debug(
            "Found %d of %d entries matching %r in %s",
            len(matched),
            len(names),
            self._pattern,
            location,
        )
        return tuple(matched)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the configuration representation."""
        return {"location": str(self._location), "pattern": self._pattern}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DataLocation:
        """Build from a `{"location": ..., "pattern": ...}` mapping. A missing pattern means none."""
        return cls(data.get("location"), data.get("pattern"))

    @classmethod
    def from_json(cls, text: str) -> DataLocation:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object for a data location, got: {text!r}")
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return f"DataLocation(location={str(self._location)!r}, pattern={self._pattern!r})"


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e


def _last_modified(path: Path) -> int:
    """Modification time in nanoseconds, or 0 if the entry vanished after listing."""
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return 0
