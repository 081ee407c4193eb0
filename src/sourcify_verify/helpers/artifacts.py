from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from .util import deep_copy, enforce_or_throw

__all__ = ["artifact_path", "get_artifact"]

logger = logging.getLogger(__name__)


def artifact_path(contract_name: str, options) -> Path:
    return Path(options.contracts_build_dir, f"{contract_name}.json").resolve()


@lru_cache(maxsize=None)
def _load_artifact_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_artifact(contract_name: str, options) -> Dict[str, Any]:
    """Read ``<contracts_build_dir>/<contract_name>.json``.

    The parsed file is shared for the lifetime of the process; callers always
    get their own deep copy.
    """
    path = artifact_path(contract_name, options)

    logger.debug(f"Reading artifact file at {path}")
    enforce_or_throw(path.is_file(), f"Could not find {contract_name} artifact at {path}")

    return deep_copy(_load_artifact_file(str(path)))
