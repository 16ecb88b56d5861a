"""Configuration loading from environment and YAML files."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROVIDERS = ["patterns", "style_guide", "web_components", "boilerplate"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Rate limiting (fixed window, per client)
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_ms: int = 60_000
    rate_limit_max_keys: int = 10_000

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # SSE transport
    sse_path: str = "/sse"
    sse_keepalive_seconds: float = 30.0

    # Host header validation for the SSE endpoint event
    allowed_hosts: list[str] = [
        "www.mcpsystem.design",
        "mcpsystem.design",
        "localhost:3000",
        "localhost",
        "127.0.0.1:3000",
        "127.0.0.1",
    ]
    default_host: str = "www.mcpsystem.design"

    # Catalog data directory; empty means the packaged YAML files
    catalog_dir: str = ""

    # Server info
    server_name: str = "mcpdesignsystem"
    server_version: str = "1.0.0"

    # Host and port
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_tools_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load tool provider configuration from YAML file.

    Args:
        config_path: Path to the config file. If None, uses default location.

    Returns:
        Dictionary with configuration data.
    """
    if config_path is None:
        possible_paths = [
            Path("config/tools.yaml"),
            Path(__file__).parent.parent.parent / "config" / "tools.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = path
                break
        else:
            return {"enabled_providers": list(DEFAULT_PROVIDERS)}

    config_path = Path(config_path)
    if not config_path.exists():
        return {"enabled_providers": list(DEFAULT_PROVIDERS)}

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def get_enabled_providers(config: dict[str, Any] | None = None) -> list[str]:
    """Get list of enabled tool provider names."""
    if config is None:
        config = load_tools_config()
    return config.get("enabled_providers", list(DEFAULT_PROVIDERS))
