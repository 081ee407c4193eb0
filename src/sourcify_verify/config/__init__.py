from .settings import API_URL, LOOKUP_URL, load_env
from .build_config import BuildConfig, load_build_config

__all__ = [
    "API_URL",
    "LOOKUP_URL",
    "BuildConfig",
    "load_build_config",
    "load_env",
]
