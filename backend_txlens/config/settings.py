"""
Application settings and environment configuration.

Responsibilities:
- Read configuration from environment variables and .env (see config.env).
- Provide defaults for optional settings.
- Expose a typed, immutable Settings object (RPC URL, market-data URL,
  text-generation provider, API host/port) used by the API server at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from backend_txlens.config import env


@dataclass(frozen=True)
class Settings:
    """Process configuration. Built once at startup; the active provider never changes afterwards."""

    active_llm: str = env.DEFAULT_PROVIDER
    api_keys: dict[str, str] = field(default_factory=dict)
    models: dict[str, str] = field(default_factory=lambda: dict(env.DEFAULT_MODELS))
    solana_rpc_url: str = env.MAINNET_RPC_URL
    solana_cluster: str = env.DEFAULT_CLUSTER
    jupiter_api_url: str = env.JUPITER_API_URL
    http_timeout_sec: float = 30.0
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def active_api_key(self) -> str:
        return self.api_keys.get(self.active_llm, "")

    @property
    def active_model(self) -> str:
        return self.models.get(self.active_llm, "")

    def provider_configured(self) -> bool:
        """True when the active provider is known and has a credential."""
        return self.active_llm in env.PROVIDERS and bool(self.active_api_key)


def get_settings() -> Settings:
    """
    Return the current application settings read from the environment.

    Not cached: callers that need a stable view (the API lifespan) read it once.
    """
    return Settings(
        active_llm=env.get_active_llm(),
        api_keys={p: env.get_llm_api_key(p) for p in env.PROVIDERS},
        models={p: env.get_llm_model(p) for p in env.PROVIDERS},
        solana_rpc_url=env.get_solana_rpc_url(),
        solana_cluster=env.get_solana_cluster(),
        jupiter_api_url=env.get_jupiter_api_url(),
        http_timeout_sec=env.get_float("HTTP_TIMEOUT_SEC", 30.0),
        api_host=env.get_str("API_HOST", "0.0.0.0"),
        api_port=env.get_int("API_PORT", 8000),
    )
