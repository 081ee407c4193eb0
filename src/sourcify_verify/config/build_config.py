"""Truffle project configuration.

Truffle itself hands plugins a resolved config object. Here the same fields
are read from a JSON project file (``truffle-config.json`` by default)::

    {
      "networks": {
        "goerli": {"network_id": 5, "url": "https://rpc.ankr.com/eth_goerli"},
        "development": {"network_id": "*", "host": "127.0.0.1", "port": 8545}
      },
      "contracts_build_directory": "build/contracts",
      "contracts_directory": "contracts"
    }

Relative directories are resolved against the working directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from web3 import Web3

from ..helpers.util import ConfigError
from .settings import get_rpc_url_override

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "truffle-config.json"
DEFAULT_BUILD_DIRECTORY = "build/contracts"
DEFAULT_CONTRACTS_DIRECTORY = "contracts"


@dataclass
class BuildConfig:
    network: str
    network_id: Any
    working_directory: str
    contracts_build_directory: str
    contracts_directory: str
    networks: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    provider: Any = None
    # Positional command tokens, e.g. ["sourcify", "MetaCoin@0x..."]
    tokens: List[str] = field(default_factory=list)
    debug: bool = False


def provider_url(network_config: Dict[str, Any]) -> Optional[str]:
    """Return the JSON-RPC URL for a network entry, or None if it has none."""
    override = get_rpc_url_override()
    if override:
        return override
    url = network_config.get("url")
    if url:
        return str(url)
    host = network_config.get("host")
    if host:
        port = network_config.get("port", 8545)
        return f"http://{host}:{port}"
    return None


def _resolve_dir(working_directory: Path, value: Optional[str], default: str) -> str:
    path = Path(value or default)
    if not path.is_absolute():
        path = working_directory / path
    return str(path.resolve())


def load_build_config(
    network: str,
    tokens: List[str],
    *,
    working_directory: Optional[str] = None,
    config_file: Optional[str] = None,
    debug: bool = False,
) -> BuildConfig:
    workdir = Path(working_directory or ".").resolve()
    config_path = Path(config_file) if config_file else workdir / DEFAULT_CONFIG_FILE
    if not config_path.is_absolute():
        config_path = workdir / config_path

    if not config_path.exists():
        raise ConfigError(f"Could not find project configuration at {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    networks = data.get("networks") or {}
    if network not in networks:
        raise ConfigError(f"Network {network} not found in {config_path}")
    network_config = networks[network] or {}

    url = provider_url(network_config)
    provider = Web3.HTTPProvider(url) if url else None
    logger.debug(f"Network {network}: network_id={network_config.get('network_id')} provider={url}")

    return BuildConfig(
        network=network,
        network_id=network_config.get("network_id"),
        working_directory=str(workdir),
        contracts_build_directory=_resolve_dir(
            workdir, data.get("contracts_build_directory"), DEFAULT_BUILD_DIRECTORY
        ),
        contracts_directory=_resolve_dir(
            workdir, data.get("contracts_directory"), DEFAULT_CONTRACTS_DIRECTORY
        ),
        networks=networks,
        provider=provider,
        tokens=list(tokens),
        debug=debug,
    )
