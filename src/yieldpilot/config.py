"""Application configuration using pydantic-settings.

Every external endpoint and credential the service talks to is configured here.
Missing credentials are not fatal at start-up; the request that needs them
fails with a configuration error instead.
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
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    cors_origins: str = Field(
        default="", description="Comma-separated allowed CORS origins (debug allows all)"
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/yieldpilot.db",
        description="Database connection URL",
    )

    # ======================
    # Auth
    # ======================
    jwt_secret: Optional[str] = Field(default=None, description="HS256 signing secret")
    jwt_expires_days: int = Field(default=7, description="Token lifetime in days")

    # ======================
    # Chain RPC Endpoints
    # ======================
    hyperevm_rpc_url: Optional[str] = Field(default=None, description="HyperEVM RPC URL")
    hyperevm_chain_id: int = Field(default=999, description="HyperEVM chain ID")
    ethereum_rpc_url: Optional[str] = Field(default=None, description="Ethereum RPC URL")
    polygon_rpc_url: Optional[str] = Field(
        default="https://polygon-rpc.com", description="Polygon RPC URL"
    )

    # ======================
    # Lending market (HyperLend)
    # ======================
    hyperlend_api_url: str = Field(
        default="https://api.hyperlend.finance", description="HyperLend API base URL"
    )
    hyperlend_chain: str = Field(default="hyperEvm", description="HyperLend market chain")

    # ======================
    # Swap router (GlueX)
    # ======================
    gluex_quote_url: str = Field(
        default="https://router.gluex.xyz/v1/quote", description="GlueX quote endpoint"
    )
    gluex_api_key: Optional[str] = Field(default=None, description="GlueX API key")
    gluex_unique_pid: Optional[str] = Field(default=None, description="GlueX partner ID")
    gluex_chain_id: str = Field(default="hyperevm", description="GlueX chain identifier")

    # ======================
    # OpenAI
    # ======================
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_api_url: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )

    # ======================
    # Outbound HTTP
    # ======================
    http_timeout_seconds: float = Field(
        default=15.0, gt=0, description="Timeout applied to every external call"
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse CORS origins into a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_rpc_url(self, network: str) -> str:
        """Get RPC URL for a network name, empty string when not configured."""
        rpc_map = {
            "hyperevm": self.hyperevm_rpc_url,
            "ethereum": self.ethereum_rpc_url,
            "polygon": self.polygon_rpc_url,
        }
        return rpc_map.get(network.lower()) or ""

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "database_url": self._redact_url(self.database_url),
            "jwt_secret": "***" if self.jwt_secret else "(not set)",
            "chains": {
                "hyperevm": {
                    "rpc": self._redact_url(self.hyperevm_rpc_url or "(not set)"),
                    "chain_id": self.hyperevm_chain_id,
                },
                "ethereum": {"rpc": self._redact_url(self.ethereum_rpc_url or "(not set)")},
                "polygon": {"rpc": self._redact_url(self.polygon_rpc_url or "(not set)")},
            },
            "lending": {
                "hyperlend": self.hyperlend_api_url,
                "chain": self.hyperlend_chain,
            },
            "router": {
                "gluex": self.gluex_quote_url,
                "api_key": "***" if self.gluex_api_key else "(not set)",
                "unique_pid": "***" if self.gluex_unique_pid else "(not set)",
            },
            "openai": {"api_key": "***" if self.openai_api_key else "(not set)"},
            "http_timeout_seconds": self.http_timeout_seconds,
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
