"""
Resolve local data locations (a single file, or a directory of files filtered
by a regular expression) into the files to read, most recently modified first.

Usage::

    from localfile import DataLocation

    location = DataLocation("/var/log/presto", r"http-request\\.log.*")
    for path in location.files():
        ...
"""

from localfile.config import LocalFileConfig, TableConfig, build_data_locations, load_config
from localfile.data_location import MATCH_ALL, DataLocation
from localfile.errors import (
    LOCAL_FILE_ERROR_CODE,
    ErrorCode,
    ErrorType,
    LocalFileError,
    StaleLocationError,
)

__all__ = [
    "LOCAL_FILE_ERROR_CODE",
    "MATCH_ALL",
    "DataLocation",
    "ErrorCode",
    "ErrorType",
    "LocalFileConfig",
    "LocalFileError",
    "StaleLocationError",
    "TableConfig",
    "build_data_locations",
    "load_config",
]
