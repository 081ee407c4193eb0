"""Submit a rebuilt compiler input to the Sourcify verification API."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict

import requests

from ..config.settings import LOOKUP_URL
from ..helpers.compiler_input import extract_compiler_version, get_input_json, parse_metadata
from ..helpers.util import VerificationError

__all__ = [
    "VerificationRequest",
    "build_files",
    "build_verification_request",
    "log_response",
    "send_verify_request",
]

logger = logging.getLogger(__name__)

_DIRECTORY_PART = re.compile(r"^.*[\\/]")


@dataclass
class VerificationRequest:
    address: str
    chain: str
    files: Dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {"address": self.address, "chain": self.chain, "files": self.files}


def build_files(input_json: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, str]:
    # Sourcify only gets bare file names; files with the same name in
    # different directories overwrite each other here.
    files: Dict[str, str] = {}
    for path, source in input_json["sources"].items():
        files[_DIRECTORY_PART.sub("", path)] = source["content"]
    files["metadata.json"] = json.dumps(metadata, separators=(",", ":"), ensure_ascii=False)
    return files


def build_verification_request(artifact: Dict[str, Any], options) -> VerificationRequest:
    compiler_version = extract_compiler_version(artifact)
    logger.debug(f"Compiler version: {compiler_version}")

    input_json = get_input_json(artifact, options)
    files = build_files(input_json, parse_metadata(artifact))

    return VerificationRequest(
        address=artifact["networks"][str(options.network_id)]["address"],
        chain=str(options.chain_id),
        files=files,
    )


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if message:
            return str(message)
    return json.dumps(body)


def send_verify_request(artifact: Dict[str, Any], options) -> requests.Response:
    request = build_verification_request(artifact, options)
    payload = request.to_payload()

    logger.debug("Sending verify request with POST arguments:")
    logger.debug(json.dumps(payload, indent=2))

    try:
        response = requests.post(options.api_url, json=payload)
    except requests.RequestException as e:
        raise VerificationError(str(e)) from e

    if not response.ok:
        raise VerificationError(_error_message(response))

    return response


def log_response(response: requests.Response, contract_name: str, lookup_url: str = LOOKUP_URL) -> None:
    try:
        result = response.json()["result"]
        for contract in result:
            if contract.get("storageTimestamp"):
                logger.info(
                    f" Contract {contract_name} is already verified, "
                    f"verification date: {contract['storageTimestamp']}"
                )
            else:
                logger.info(f" Contract {contract_name} verified succesfully")
            logger.info(f"   {contract['address']}: {contract['status']}_match")
            logger.info(f"   Sourcify url: {lookup_url}{contract['address']}")
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise VerificationError(response.text) from e
