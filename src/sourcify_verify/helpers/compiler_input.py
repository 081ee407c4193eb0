"""
Rebuild the Solidity standard JSON input from a Truffle artifact.

Public API
----------
get_input_json(artifact, options)
    ``{language, sources, settings}`` reconstructed from the artifact metadata.
get_libraries(artifact, options)
    Library link addresses grouped by the source file that declares them.
order_sources(source_paths, main_path)
    Source paths with the main contract first.
extract_compiler_version(artifact)
    ``v<compiler version>`` from the metadata.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List

from .artifacts import get_artifact
from .paths import normalise_contract_path, resolve_source_path, strip_project_prefix
from .util import VerificationError

__all__ = [
    "extract_compiler_version",
    "get_input_json",
    "get_libraries",
    "order_sources",
    "parse_metadata",
]

logger = logging.getLogger(__name__)

# Copied from the metadata into the input settings, in this order
SETTINGS_KEYS = ("remappings", "optimizer", "evmVersion")


def parse_metadata(artifact: Dict[str, Any]) -> Dict[str, Any]:
    raw = artifact.get("metadata")
    if not raw:
        raise VerificationError(f"No metadata found in {artifact.get('contractName')} artifact")
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise VerificationError(f"Could not parse metadata of {artifact.get('contractName')}: {e}") from e


def extract_compiler_version(artifact: Dict[str, Any]) -> str:
    metadata = parse_metadata(artifact)
    return f"v{metadata['compiler']['version']}"


def order_sources(source_paths: Iterable[str], main_path: str) -> List[str]:
    # Reverse declaration order, with the "main" contract on top
    return sorted(reversed(list(source_paths)), key=lambda path: 0 if path == main_path else 1)


def get_input_json(artifact: Dict[str, Any], options) -> Dict[str, Any]:
    metadata = parse_metadata(artifact)
    libraries = get_libraries(artifact, options)

    ordered_sources = order_sources(metadata["sources"].keys(), artifact["ast"]["absolutePath"])

    sources: Dict[str, Dict[str, str]] = {}
    for contract_path in ordered_sources:
        # De-unixify Windows paths and replace the 'project:' prefix so the file can be read
        normalised_contract_path = normalise_contract_path(contract_path, options)
        absolute_path = resolve_source_path(normalised_contract_path, options)
        content = absolute_path.read_text(encoding="utf-8")

        sources[strip_project_prefix(contract_path)] = {"content": content}

    metadata_settings = metadata.get("settings") or {}
    settings = {key: metadata_settings[key] for key in SETTINGS_KEYS if key in metadata_settings}
    settings["libraries"] = libraries

    return {
        "language": metadata.get("language"),
        "sources": sources,
        "settings": settings,
    }


def get_libraries(artifact: Dict[str, Any], options) -> Dict[str, Dict[str, str]]:
    """
    Group the linked libraries of the target deployment by source file, e.g.::

        {
          "/contracts/ConvertLib.sol": {
            "ConvertLib": "0x...",
            "OtherLibInSameSourceFile": "0x...",
          }
        }
    """
    libraries: Dict[str, Dict[str, str]] = {}

    links = artifact["networks"][str(options.network_id)].get("links") or {}

    for library_name, library_address in links.items():
        library_artifact = get_artifact(library_name, options)
        library_source_file = strip_project_prefix(library_artifact["ast"]["absolutePath"])

        libraries.setdefault(library_source_file, {})[library_name] = library_address
        logger.debug(f"Linked library {library_name} ({library_source_file}) at {library_address}")

    return libraries
