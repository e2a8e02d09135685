"""Configuration management for the Asterisk ARI applications client.

This module provides the configuration class using Pydantic for type safety,
validation, and environment variable integration.
"""

import json
import os
from typing import Any, Dict

import tomli
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from asterisk_ari import __version__


class ARIConfig(BaseSettings):
    """
    Configuration class for Asterisk ARI connection settings.

    Instances are immutable once validated.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASTERISK_ARI_",
        case_sensitive=False,
        frozen=True,
        env_file=None,
        extra="ignore",  # allow unknown env vars without failing
    )

    # ────────────────────────── Connection settings ──────────────────────────
    base_url: str = Field(
        ...,
        description="Root ARI endpoint without trailing slash, e.g. http://pbx.local:8088/ari",
    )
    username: str = Field(..., description="ARI username")
    password: str = Field(..., description="ARI password")

    # ────────────────────────── Timeout ──────────────────────────────────────
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    # ────────────────────────── HTTP settings ────────────────────────────────
    user_agent: str = Field(
        default=f"asterisk-ari-applications/{__version__}",
        description="User-Agent header"
    )

    # ────────────────────────── Logging ──────────────────────────────────────
    debug: bool = Field(default=False, description="Enable debug logging")
    log_level: str = Field(default="INFO", description="Logging level")

    # ────────────────────────── Validators ───────────────────────────────────
    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("Base URL cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        return v

    @field_validator("username")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        u = v.upper()
        if u not in levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(levels))}")
        return u

    # ────────────────────────── Helper Properties ────────────────────────────
    @property
    def applications_url(self) -> str:
        return f"{self.base_url}/applications"

    @property
    def auth_tuple(self) -> tuple[str, str]:
        return self.username, self.password

    # ────────────────────────── Convenience Constructors ─────────────────────
    @classmethod
    def from_env(cls) -> "ARIConfig":
        """
        Load config from environment, using .env only if present.
        """
        if os.path.exists(".env"):
            return cls(_env_file=".env", _env_file_encoding="utf-8")
        return cls()

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ARIConfig":
        return cls(**config)

    @classmethod
    def from_file(cls, path: str) -> "ARIConfig":
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, "rb") as f:
            if path.endswith(".json"):
                data = json.load(f)
            elif path.endswith((".toml", ".tml")):
                data = tomli.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {path}")
        return cls(**data)

    # ────────────────────────── Utility ──────────────────────────────────────
    def mask_sensitive_data(self) -> Dict[str, Any]:
        d = self.model_dump()
        if "password" in d:
            d["password"] = "*" * len(d["password"])
        return d

    def __repr__(self) -> str:
        return f"ARIConfig({self.mask_sensitive_data()})"

    def __str__(self) -> str:
        return self.__repr__()

    def get_timeout_config(self) -> Dict[str, float]:
        return {
            "total": self.timeout,
            "connect": min(self.timeout / 3, 10.0),
            "sock_read": self.timeout,
            "sock_connect": min(self.timeout / 3, 10.0),
        }
