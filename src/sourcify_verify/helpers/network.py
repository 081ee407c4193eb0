"""
Chain ID / network ID resolution.

If the network config includes a provider it is queried for ``eth_chainId``
and ``net_version``. If that is not possible, or either answer is unusable,
both IDs fall back to the configured ``network_id``. Resolution never raises.

Providers come in different shapes, so each one is wrapped in an
``RpcSender`` adapter exposing ``send_request(method, params) -> RpcResult``:

- ``Web3ProviderSender`` for web3 providers (``make_request(method, params)``)
- ``JsonRpcSender`` for plain transports (``send(payload) -> response``)
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

import requests
from web3.exceptions import Web3Exception

__all__ = [
    "JsonRpcSender",
    "NetworkInfo",
    "RpcResult",
    "RpcSender",
    "Web3ProviderSender",
    "get_network",
    "get_rpc_sender",
]

logger = logging.getLogger(__name__)

# Errors a provider may raise while talking to the node
TRANSPORT_ERRORS = (requests.RequestException, OSError, ValueError, Web3Exception)


@dataclass(frozen=True)
class NetworkInfo:
    chain_id: Any
    network_id: Any


@dataclass(frozen=True)
class RpcResult:
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RpcSender(ABC):
    @abstractmethod
    def send_request(self, method: str, params: List[Any]) -> RpcResult:
        pass


def _unwrap(response: Any) -> RpcResult:
    if not isinstance(response, dict):
        return RpcResult(error=f"Unexpected RPC response: {response!r}")
    if response.get("error"):
        return RpcResult(error=f"RPC error: {response['error']!r}")
    return RpcResult(value=response.get("result"))


class Web3ProviderSender(RpcSender):
    def __init__(self, provider):
        self.provider = provider

    def send_request(self, method: str, params: List[Any]) -> RpcResult:
        try:
            response = self.provider.make_request(method, params)
        except TRANSPORT_ERRORS as e:
            return RpcResult(error=str(e))
        return _unwrap(response)


class JsonRpcSender(RpcSender):
    def __init__(self, provider):
        self.provider = provider

    def send_request(self, method: str, params: List[Any]) -> RpcResult:
        payload = {"jsonrpc": "2.0", "id": int(time.time() * 1000), "method": method, "params": params}
        try:
            response = self.provider.send(payload)
        except TRANSPORT_ERRORS as e:
            return RpcResult(error=str(e))
        return _unwrap(response)


def get_rpc_sender(provider: Any) -> Optional[RpcSender]:
    """Wrap a provider in the matching adapter, or return None if it cannot send requests."""
    if provider is None:
        return None
    if callable(getattr(provider, "make_request", None)):
        return Web3ProviderSender(provider)
    if callable(getattr(provider, "send", None)):
        return JsonRpcSender(provider)
    return None


def _parse_int(value: Any, base: int) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    try:
        return int(value.strip(), base)
    except ValueError:
        return None


def get_network(config) -> NetworkInfo:
    """Return chain ID & network ID from the provider, or the configured network ID for both."""
    fallback = NetworkInfo(chain_id=config.network_id, network_id=config.network_id)

    sender = get_rpc_sender(config.provider)
    if sender is None:
        logger.debug("No (valid) provider configured, using config network ID as fallback")
        return fallback

    logger.debug("Retrieving network's network ID & chain ID")

    chain_id_result = sender.send_request("eth_chainId", [])
    network_id_result = sender.send_request("net_version", [])

    chain_id = _parse_int(chain_id_result.value, 16) if chain_id_result.ok else None
    network_id = _parse_int(network_id_result.value, 10) if network_id_result.ok else None

    if not chain_id or not network_id:
        for result in (chain_id_result, network_id_result):
            if not result.ok:
                logger.debug(f"RPC request failed: {result.error}")
        logger.debug("Failed to retrieve network information, using configured network ID instead")
        return fallback

    return NetworkInfo(chain_id=chain_id, network_id=network_id)
