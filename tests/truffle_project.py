"""Builds a small Truffle project on disk for the tests.

Layout::

    <root>/truffle-config.json
    <root>/contracts/{MetaCoin,ConvertLib}.sol
    <root>/node_modules/@openzeppelin/contracts/access/Ownable.sol
    <root>/build/contracts/{MetaCoin,ConvertLib,MathLib}.json

MetaCoin is deployed on network 5 and links ConvertLib and MathLib, which
both live in ConvertLib.sol.
"""

import json
from pathlib import Path

from sourcify_verify.verify.runner import VerifyOptions

METACOIN_ADDRESS = "0xabc0000000000000000000000000000000000001"
CONVERTLIB_ADDRESS = "0x1110000000000000000000000000000000000002"
MATHLIB_ADDRESS = "0x2220000000000000000000000000000000000003"

SOURCES = {
    "contracts/MetaCoin.sol": "pragma solidity ^0.8.0;\nimport './ConvertLib.sol';\ncontract MetaCoin {}\n",
    "contracts/ConvertLib.sol": "pragma solidity ^0.8.0;\nlibrary ConvertLib {}\nlibrary MathLib {}\n",
    "node_modules/@openzeppelin/contracts/access/Ownable.sol": "pragma solidity ^0.8.0;\nabstract contract Ownable {}\n",
}

# Declaration order as the compiler writes it into the metadata
DECLARED_SOURCES = [
    "project:/contracts/ConvertLib.sol",
    "project:/contracts/MetaCoin.sol",
    "@openzeppelin/contracts/access/Ownable.sol",
]

METADATA = {
    "compiler": {"version": "0.8.19+commit.7dd6d404"},
    "language": "Solidity",
    "sources": {path: {"keccak256": "0x00", "license": "MIT"} for path in DECLARED_SOURCES},
    "settings": {
        "compilationTarget": {"project:/contracts/MetaCoin.sol": "MetaCoin"},
        "evmVersion": "paris",
        "optimizer": {"enabled": True, "runs": 200},
        "remappings": [],
    },
    "version": 1,
}


def _artifact(name, absolute_path, networks, metadata=None):
    return {
        "contractName": name,
        "metadata": json.dumps(metadata or METADATA),
        "ast": {"absolutePath": absolute_path},
        "networks": networks,
    }


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def make_project(root, *, links=True, network_id="5"):
    root = Path(root)
    for rel, content in SOURCES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    deployment = {"address": METACOIN_ADDRESS}
    if links:
        deployment["links"] = {"ConvertLib": CONVERTLIB_ADDRESS, "MathLib": MATHLIB_ADDRESS}

    build_dir = root / "build" / "contracts"
    write_json(
        build_dir / "MetaCoin.json",
        _artifact("MetaCoin", "project:/contracts/MetaCoin.sol", {network_id: deployment}),
    )
    write_json(
        build_dir / "ConvertLib.json",
        _artifact("ConvertLib", "project:/contracts/ConvertLib.sol", {network_id: {"address": CONVERTLIB_ADDRESS}}),
    )
    write_json(
        build_dir / "MathLib.json",
        _artifact("MathLib", "project:/contracts/ConvertLib.sol", {network_id: {"address": MATHLIB_ADDRESS}}),
    )
    write_json(
        root / "truffle-config.json",
        {
            "networks": {
                "goerli": {"network_id": 5},
                "mainnet": {"network_id": 1},
                "local": {"network_id": "*", "host": "127.0.0.1", "port": 7545},
            }
        },
    )
    return root


def make_options(root, *, chain_id=5, network_id=5):
    root = Path(root)
    return VerifyOptions(
        api_url="https://sourcify.test/server",
        chain_id=chain_id,
        network_id=network_id,
        project_dir=str(root),
        contracts_build_dir=str(root / "build" / "contracts"),
        contracts_dir=str(root / "contracts"),
        lookup_url="https://sourcify.dev/#/lookup/",
    )
