"""Checks that are performed to configuration options."""

import os
from pathlib import Path

from pydantic import FilePath


class InvalidConfigurationError(Exception):
    """Summarizer stack configuration is invalid."""


def file_check(path: FilePath, desc: str) -> None:
    """
    Ensure the given path is an existing regular file and is readable.

    If the path is not a regular file or is not readable, raises
    InvalidConfigurationError.

    Parameters:
        path (FilePath): Filesystem path to validate.
        desc (str): Short description of the value being checked; used in error
        messages.

    Raises:
        InvalidConfigurationError: If `path` does not point to a file or is not
        readable.
    """
    if not os.path.isfile(path):
        raise InvalidConfigurationError(f"{desc} '{path}' is not a file")
    if not os.access(path, os.R_OK):
        raise InvalidConfigurationError(f"{desc} '{path}' is not readable")


def directory_check(path: Path, desc: str, must_be_writable: bool = True) -> None:
    """Ensure the given path is an existing directory, optionally writable."""
    if not os.path.isdir(path):
        raise InvalidConfigurationError(f"{desc} '{path}' is not a directory")
    if must_be_writable and not os.access(path, os.W_OK):
        raise InvalidConfigurationError(f"{desc} '{path}' is not writable")


def read_secret_file(path: FilePath, desc: str) -> str:
    """Read secret (like API key) stored in a file, without trailing whitespace."""
    file_check(path, desc)
    with open(path, encoding="utf-8") as f:
        return f.read().strip()
