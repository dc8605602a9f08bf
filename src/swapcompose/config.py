"""Application configuration using pydantic-settings.

Supplies the active network, the router that owns approvals and the helper
contract that receives approve calls.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")
    log_level: str = Field(default="INFO", description="Log level when debug is off")

    # ======================
    # Network / Router
    # ======================
    network_id: int = Field(default=1, description="Active EVM network (chain) ID")
    router_address: str = Field(
        default="0xDEF171Fe48CF0115B1d80b88dc8eAB59176FEe57",
        description="Router address; owner of approvals in allowance reads",
    )
    approve_target_address: Optional[str] = Field(
        default=None,
        description="Helper contract receiving approve calls (defaults to router)",
    )

    # ======================
    # RPC
    # ======================
    rpc_url: str = Field(default="https://eth.llamarpc.com", description="JSON-RPC endpoint")
    rpc_timeout: float = Field(default=15.0, description="RPC request timeout in seconds")

    # ======================
    # Approval cache
    # ======================
    cache_prefix: str = Field(default="swapcompose", description="Cache key prefix")
    cache_backend: str = Field(default="memory", description="Cache backend: memory or sql")
    cache_database_url: str = Field(
        default="sqlite+aiosqlite:///./data/swapcompose_cache.db",
        description="Database URL for the sql cache backend",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def effective_approve_target(self) -> str:
        """Address that approve calls are sent to."""
        return self.approve_target_address or self.router_address

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "network_id": self.network_id,
            "router_address": self.router_address,
            "approve_target_address": self.effective_approve_target,
            "rpc_url": self._redact_url(self.rpc_url),
            "cache": {
                "prefix": self.cache_prefix,
                "backend": self.cache_backend,
                "database_url": self._redact_url(self.cache_database_url),
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in a URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
