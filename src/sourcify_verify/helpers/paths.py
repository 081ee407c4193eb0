"""
Source path handling for Truffle metadata.

Public API
----------
normalise_contract_path(contract_path, options)
    Turn a metadata source path into one the local filesystem can open.
get_absolute_path(contract_path, options)
    Replace the ``project:/`` prefix with the project directory.
strip_project_prefix(contract_path)
    Source key as stored in the compiler input.
resolve_source_path(contract_path, options)
    Locate the file on disk (including ``node_modules`` imports).
"""

from __future__ import annotations

import ntpath
import os
import re
import sys
from pathlib import Path

from .util import VerificationError

__all__ = [
    "PROJECT_PREFIX",
    "get_absolute_path",
    "normalise_contract_path",
    "resolve_source_path",
    "strip_project_prefix",
]

# Added to metadata source paths in Truffle v5.3.14
PROJECT_PREFIX = "project:"

_UNIXIFIED_WINDOWS_PATH = re.compile(r"^/[A-Z]/", re.IGNORECASE)


def normalise_contract_path(contract_path: str, options) -> str:
    """
    The metadata in the Truffle artifact file changes source paths on Windows.
    Instead of ``D:\\Hello\\World.sol`` it contains ``/D/Hello/World.sol``,
    which Windows cannot open. This turns ``/D/Hello/World.sol`` back into
    ``D:\\Hello\\World.sol``. Regular Unix paths are left alone, and nothing
    changes on platforms other than Windows.
    """
    absolute_path = get_absolute_path(contract_path, options)

    if sys.platform != "win32":
        return absolute_path

    if not _UNIXIFIED_WINDOWS_PATH.match(absolute_path):
        return absolute_path

    drive_letter = absolute_path[1:2]
    return ntpath.abspath(f"{drive_letter}:/{absolute_path[3:]}")


def get_absolute_path(contract_path: str, options) -> str:
    # Older versions of truffle already used the absolute path,
    # and node_modules contracts don't use the project: prefix
    if not contract_path.startswith(PROJECT_PREFIX + "/"):
        return contract_path

    relative_contract_path = contract_path.replace(PROJECT_PREFIX + "/", "", 1)
    return os.path.join(options.project_dir, relative_contract_path)


def strip_project_prefix(contract_path: str) -> str:
    return contract_path.replace(PROJECT_PREFIX, "", 1)


def _node_modules_dirs(start: Path):
    for directory in (start, *start.parents):
        candidate = directory / "node_modules"
        if candidate.is_dir():
            yield candidate


def resolve_source_path(contract_path: str, options) -> Path:
    """Find the file for a normalised source path.

    Paths that do not exist as given are looked up as package imports
    (``@openzeppelin/contracts/...``) in every ``node_modules`` directory from
    the project directory upwards.
    """
    path = Path(contract_path)
    if path.is_file():
        return path.resolve()

    if not path.is_absolute():
        for node_modules in _node_modules_dirs(Path(options.project_dir).resolve()):
            candidate = node_modules / path
            if candidate.is_file():
                return candidate.resolve()

    raise VerificationError(f"Could not find source file {contract_path}")
