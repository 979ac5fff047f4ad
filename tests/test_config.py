"""Tests for config file discovery, loading, and table resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from localfile.config import (
    HTTP_REQUEST_LOG_TABLE,
    LocalFileConfig,
    TableConfig,
    build_data_locations,
    find_config_file,
    load_config,
    tomllib,
)


def test_find_config_localfile_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text('[tables.logs]\nlocation = "/tmp"\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_localfile_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "localfile.toml").write_text('[tables.logs]\nlocation = "/tmp"\n')
    dot_config = tmp_path / ".localfile.toml"
    dot_config.write_text('[tables.logs]\nlocation = "/var"\n')
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.localfile.tables.logs]\nlocation = "/tmp"\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_pyproject_invalid_toml_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.localfile\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text('[tables.logs]\nlocation = "/tmp"\n')
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_load_config_tables(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text(
        "[tables.access]\n"
        'location = "/var/log/access"\n'
        "pattern = 'access\\.log.*'\n"
        "\n"
        "[tables.events]\n"
        'location = "/data/events.jsonl"\n'
    )
    config = load_config(config_file)
    assert config.tables == {
        "access": TableConfig(location="/var/log/access", pattern=r"access\.log.*"),
        "events": TableConfig(location="/data/events.jsonl", pattern=None),
    }


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.localfile.tables.logs]\nlocation = \"/tmp\"\npattern = '.*'\n")
    config = load_config(config_file)
    assert config.tables == {"logs": TableConfig(location="/tmp", pattern=".*")}


def test_load_config_http_request_log_keys(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text(
        'http-request-log-location = "/var/log/presto"\n'
        "http-request-log-pattern = 'http-request\\.log.*'\n"
    )
    config = load_config(config_file)
    assert config.tables == {
        HTTP_REQUEST_LOG_TABLE: TableConfig(
            location="/var/log/presto", pattern=r"http-request\.log.*"
        ),
    }


def test_load_config_kebab_case_table_name(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text('[tables.access-log]\nlocation = "/tmp"\n')
    assert list(load_config(config_file).tables) == ["access_log"]


def test_load_config_missing_location_fails(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text("[tables.logs]\npattern = '.*'\n")
    with pytest.raises(ValueError, match="missing a `location`"):
        load_config(config_file)


def test_load_config_non_string_pattern_fails(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text('[tables.logs]\nlocation = "/tmp"\npattern = 3\n')
    with pytest.raises(ValueError, match="non-string `pattern`"):
        load_config(config_file)


def test_load_config_invalid_toml_fails(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text("[tables.logs\nlocation = \"/tmp\"\n")
    with pytest.raises(tomllib.TOMLDecodeError):
        load_config(config_file)


def test_load_config_empty(tmp_path: Path) -> None:
    config_file = tmp_path / "localfile.toml"
    config_file.write_text("")
    assert load_config(config_file) == LocalFileConfig()


def test_build_data_locations(tmp_path: Path) -> None:
    (tmp_path / "a.log").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    events = tmp_path / "events.jsonl"
    events.write_text("{}\n")
    created = tmp_path / "new" / "dir"

    config = LocalFileConfig(
        tables={
            "logs": TableConfig(location=str(tmp_path), pattern=r".*\.log"),
            "events": TableConfig(location=str(events)),
            "fresh": TableConfig(location=str(created), pattern=".*"),
        }
    )
    locations = build_data_locations(config)

    assert locations["logs"].files() == (tmp_path / "a.log",)
    assert locations["events"].files() == (events,)
    assert created.is_dir()
    assert locations["fresh"].files() == ()


def test_build_data_locations_invalid_entry_fails(tmp_path: Path) -> None:
    config = LocalFileConfig(tables={"gone": TableConfig(location=str(tmp_path / "missing"))})
    with pytest.raises(ValueError, match="location does not exist"):
        build_data_locations(config)
