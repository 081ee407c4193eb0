"""Service endpoints and environment loading.

Environment variables (optionally from a ``.env`` file):
    - SOURCIFY_API_URL: verification endpoint (default: ``API_URL``)
    - SOURCIFY_LOOKUP_URL: prefix of the public lookup page (default: ``LOOKUP_URL``)
    - RPC_URL: overrides the provider URL of the selected network
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


API_URL = "https://sourcify.dev/server"
LOOKUP_URL = "https://sourcify.dev/#/lookup/"


def load_env(env_file: Optional[str] = None) -> None:
    # Load base .env first if present, then the explicit file on top of it
    base_env = Path(".env")
    if base_env.exists():
        load_dotenv(base_env)
    if env_file:
        load_dotenv(env_file, override=True)


def get_api_url() -> str:
    return os.getenv("SOURCIFY_API_URL") or API_URL


def get_lookup_url() -> str:
    return os.getenv("SOURCIFY_LOOKUP_URL") or LOOKUP_URL


def get_rpc_url_override() -> Optional[str]:
    return os.getenv("RPC_URL") or None
