"""
Environment variable loading for txlens.

- SOLANA_RPC_URL: RPC endpoint (default: public mainnet-beta)
- SOLANA_CLUSTER: cluster label reported in response metadata (default: mainnet-beta)
- JUPITER_API_URL: market-data base URL (default: https://lite-api.jup.ag)
- ACTIVE_LLM: groq | gemini | openai | deepseek (default: groq)
- <PROVIDER>_API_KEY / <PROVIDER>_MODEL: credential and model override per provider
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_txlens/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_CLUSTER = "mainnet-beta"
JUPITER_API_URL = "https://lite-api.jup.ag"

PROVIDERS = ("groq", "gemini", "openai", "deepseek")
DEFAULT_PROVIDER = "groq"

DEFAULT_MODELS = {
    "groq": "llama-3.3-70b-versatile",
    "gemini": "gemini-2.0-flash-exp",
    "openai": "gpt-4o-mini",
    "deepseek": "deepseek-chat",
}


def load_txlens_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or "").strip() or default


def get_solana_rpc_url() -> str:
    """Return SOLANA_RPC_URL, falling back to the public mainnet-beta endpoint."""
    load_txlens_env()
    return _env("SOLANA_RPC_URL", MAINNET_RPC_URL)


def get_solana_cluster() -> str:
    load_txlens_env()
    return _env("SOLANA_CLUSTER", DEFAULT_CLUSTER)


def get_jupiter_api_url() -> str:
    load_txlens_env()
    return _env("JUPITER_API_URL", JUPITER_API_URL).rstrip("/")


def get_active_llm() -> str:
    """
    Return ACTIVE_LLM lower-cased. Unknown names are returned as-is so the
    request handler can report them as not configured.
    """
    load_txlens_env()
    return _env("ACTIVE_LLM", DEFAULT_PROVIDER).lower()


def get_llm_api_key(provider: str) -> str:
    """Return <PROVIDER>_API_KEY or empty string."""
    load_txlens_env()
    return _env(f"{provider.upper()}_API_KEY")


def get_llm_model(provider: str) -> str:
    """Return <PROVIDER>_MODEL or the provider's default model."""
    load_txlens_env()
    return _env(f"{provider.upper()}_MODEL", DEFAULT_MODELS.get(provider, ""))


def get_float(name: str, default: float) -> float:
    load_txlens_env()
    raw = _env(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_int(name: str, default: int) -> int:
    load_txlens_env()
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_str(name: str, default: str = "") -> str:
    load_txlens_env()
    return _env(name, default)
