"""
TOML-based config file loading for localfile.

Searches for `.localfile.toml`, `localfile.toml`, or `pyproject.toml [tool.localfile]`
walking up from a start directory. Each configured table names a data location
and an optional file name pattern.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from localfile.data_location import DataLocation

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

HTTP_REQUEST_LOG_TABLE = "http_request_log"


@dataclass
class TableConfig:
    """Where one table's data lives. `pattern=None` means no pattern."""

    location: str
    pattern: str | None = None


@dataclass
class LocalFileConfig:
    """Parsed config from a TOML file, keyed by table name."""

    tables: dict[str, TableConfig] = field(default_factory=dict)


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".localfile.toml", "localfile.toml", "pyproject.toml"]

# Flat keys for the built-in HTTP request log table
_HTTP_REQUEST_LOG_KEYS: dict[str, str] = {
    "http-request-log-location": "location",
    "http-request-log-pattern": "pattern",
}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.localfile.toml` >
    `localfile.toml` > `pyproject.toml` (only if it has `[tool.localfile]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_localfile_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_localfile_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "localfile" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> LocalFileConfig:
    """
    Load a `LocalFileConfig` from a TOML file. Supports both standalone
    `localfile.toml` / `.localfile.toml` and `pyproject.toml` (extracts
    `[tool.localfile]`).
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("localfile", {})

    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> LocalFileConfig:
    """
    Parse `[tables.<name>]` sections, plus the flat `http-request-log-*` keys
    which define the `http_request_log` table.
    """
    tables: dict[str, TableConfig] = {}

    flat_log: dict[str, Any] = {}
    for key, value in data.items():
        if key in _HTTP_REQUEST_LOG_KEYS:
            flat_log[_HTTP_REQUEST_LOG_KEYS[key]] = value
    if flat_log:
        tables[HTTP_REQUEST_LOG_TABLE] = _parse_table(HTTP_REQUEST_LOG_TABLE, flat_log)

    raw_tables = data.get("tables", {})
    if not isinstance(raw_tables, dict):
        raise ValueError("`tables` must be a table of table definitions")
    for name, value in cast(dict[str, Any], raw_tables).items():
        if not isinstance(value, dict):
            raise ValueError(f"Table `{name}` must be a table with a `location` key")
        tables[name.replace("-", "_")] = _parse_table(name, cast(dict[str, Any], value))

    return LocalFileConfig(tables=tables)


def _parse_table(name: str, data: dict[str, Any]) -> TableConfig:
    location = data.get("location")
    if not isinstance(location, str) or not location:
        raise ValueError(f"Table `{name}` is missing a `location`")
    pattern = data.get("pattern")
    if pattern is not None and not isinstance(pattern, str):
        raise ValueError(f"Table `{name}` has a non-string `pattern`: {pattern!r}")
    return TableConfig(location=location, pattern=pattern)


def build_data_locations(config: LocalFileConfig) -> dict[str, DataLocation]:
    """
    Construct one `DataLocation` per configured table. Validation errors
    propagate, so a bad entry fails the whole load.
    """
    return {
        name: DataLocation(table.location, table.pattern) for name, table in config.tables.items()
    }
