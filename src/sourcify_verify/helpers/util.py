from __future__ import annotations

import copy
import logging
from typing import Any, Optional

__all__ = [
    "ConfigError",
    "VerificationError",
    "abort",
    "deep_copy",
    "enforce",
    "enforce_or_throw",
]

_default_logger = logging.getLogger("sourcify_verify")


class VerificationError(Exception):
    """Verification of a single contract failed; the run continues with the next one."""


class ConfigError(Exception):
    """The run cannot start (missing contracts, unknown network, bad project file)."""


def abort(message: str, logger: Optional[logging.Logger] = None, code: int = 1) -> None:
    (logger or _default_logger).error(message)
    raise SystemExit(code)


def enforce(condition: Any, message: str, logger: Optional[logging.Logger] = None, code: int = 1) -> None:
    if not condition:
        abort(message, logger, code)


def enforce_or_throw(condition: Any, message: str) -> None:
    if not condition:
        raise VerificationError(message)


def deep_copy(obj: Any) -> Any:
    return copy.deepcopy(obj)
