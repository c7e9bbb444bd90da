"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import DEFAULT_CATALOG_TIMEOUT_SECONDS, DEFAULT_RPC_TIMEOUT_SECONDS
from .domain import ChainConfig

load_dotenv()


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


class SupplySettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with SUPPLY_MONITOR_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- chain catalog (normally from config file) ---
    chains: list[ChainConfig] = Field(default_factory=list)
    tokens: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Only query chains for these tokens. Empty means all.",
    )

    # --- network ---
    rpc_timeout_seconds: float = Field(default=DEFAULT_RPC_TIMEOUT_SECONDS, gt=0)
    catalog_timeout_seconds: float = Field(
        default=DEFAULT_CATALOG_TIMEOUT_SECONDS, gt=0
    )
    max_concurrency: int | None = Field(default=None, gt=0)

    # --- output ---
    output_format: OutputFormat = OutputFormat.TABLE
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SUPPLY_MONITOR_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("tokens", mode="before")
    @classmethod
    def split_tokens(cls, v: Any) -> Any:
        """Accept a comma separated string (handy for env vars)."""
        if isinstance(v, str):
            return [token.strip() for token in v.split(",") if token.strip()]
        return v

    @model_validator(mode="after")
    def validate_unique_chain_ids(self) -> "SupplySettings":
        seen: set[str] = set()
        duplicates = []
        for chain in self.chains:
            if chain.id in seen:
                duplicates.append(chain.id)
            seen.add(chain.id)
        if duplicates:
            raise ValueError(f"Duplicate chain ids in configuration: {', '.join(duplicates)}")
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get("SUPPLY_MONITOR_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    # Try default locations
                    local_config = Path("supply-monitor.toml")
                    user_config = (
                        Path.home() / ".config" / "supply-monitor" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [supply_monitor]
                body = data.get("supply_monitor", data)
                if not isinstance(body, dict):
                    return {}

                # [[chains]] may sit at the top level next to a [supply_monitor] table
                if "chains" not in body and isinstance(data.get("chains"), list):
                    body = {**body, "chains": data["chains"]}

                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,
        )

    def selected_chains(self) -> list[ChainConfig]:
        """Configured chains, filtered by ``tokens`` (case-insensitive) when set."""
        if not self.tokens:
            return list(self.chains)
        wanted = {token.upper() for token in self.tokens}
        return [chain for chain in self.chains if chain.token.upper() in wanted]

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-friendly dict."""
        return self.model_dump(mode="json")
