"""
Verify each ``ContractName@address`` pair of a run, one after the other.

A failing contract is logged and remembered; the remaining contracts are still
processed. The run ends with ``SystemExit(1)`` if any contract failed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .. import __version__
from ..config.settings import get_api_url, get_lookup_url
from ..helpers.artifacts import get_artifact
from ..helpers.network import get_network
from ..helpers.util import enforce, enforce_or_throw
from .client import log_response, send_verify_request

__all__ = ["VerifyOptions", "parse_config", "run", "verify_contract"]

logger = logging.getLogger(__name__)
package_logger = logging.getLogger("sourcify_verify")


@dataclass
class VerifyOptions:
    api_url: str
    chain_id: Any
    network_id: Any
    project_dir: str
    contracts_build_dir: str
    contracts_dir: str
    provider: Any = None
    lookup_url: Optional[str] = None


def parse_config(config) -> VerifyOptions:
    enforce(len(config.tokens) > 1, "No contract name(s) specified", logger)

    network = get_network(config)

    return VerifyOptions(
        api_url=get_api_url(),
        chain_id=network.chain_id,
        network_id=network.network_id,
        provider=config.provider,
        project_dir=config.working_directory,
        contracts_build_dir=config.contracts_build_directory,
        contracts_dir=config.contracts_directory,
        lookup_url=get_lookup_url(),
    )


def verify_contract(contract_name_address_pair: str, options: VerifyOptions) -> bool:
    """Verify one ``ContractName@address`` pair. Returns False if Sourcify did not answer 200."""
    contract_name, _, _contract_address = contract_name_address_pair.partition("@")

    artifact = get_artifact(contract_name, options)

    deployment = (artifact.get("networks") or {}).get(str(options.network_id))
    enforce_or_throw(
        deployment,
        f"No instance of contract {artifact.get('contractName', contract_name)} "
        f"found for network id {options.network_id}",
    )
    enforce_or_throw(
        isinstance(deployment, dict),
        f"Invalid deployment record for contract {contract_name} on network id {options.network_id}",
    )

    response = send_verify_request(artifact, options)
    log_response(response, contract_name, options.lookup_url or get_lookup_url())

    return response.status_code == 200


def run(config) -> int:
    if config.debug:
        package_logger.setLevel(logging.DEBUG)
    logger.debug("DEBUG logging is turned ON")
    logger.debug(f"Running sourcify-verify v{__version__}")

    options = parse_config(config)
    logger.debug(f"Chain ID: {options.chain_id}, network ID: {options.network_id}")

    contract_name_address_pairs: List[str] = config.tokens[1:]

    failed_contracts: List[str] = []
    for contract_name_address_pair in contract_name_address_pairs:
        logger.info(f"Verifying {contract_name_address_pair}")
        try:
            if not verify_contract(contract_name_address_pair, options):
                failed_contracts.append(contract_name_address_pair)
        except Exception as e:
            logger.error(str(e))
            failed_contracts.append(contract_name_address_pair)
        logger.info("")

    enforce(
        len(failed_contracts) == 0,
        f"Failed to verify {len(failed_contracts)} contract(s): {', '.join(failed_contracts)}",
        logger,
    )

    logger.info(f"Successfully verified {len(contract_name_address_pairs)} contract(s).")
    return 0
