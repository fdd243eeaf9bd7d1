"""Centralized configuration for iondid.

Uses Pydantic BaseSettings with environment variable loading and validation.
All IONDID_* environment variables are validated at import time.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = {"env_prefix": "IONDID_", "case_sensitive": False, "extra": "ignore"}

    # Logging
    log_format: str = Field(default="text", description="Log format: text or json")
    log_level: str = Field(default="INFO", description="Python log level")

    # Signing
    canonical_signatures: bool = Field(
        default=True, description="Normalize ECDSA signatures to low-S form"
    )

    # DIDs
    did_method: str = Field(default="ion", description="DID method name for short/long-form DIDs")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            msg = f"IONDID_LOG_FORMAT must be 'text' or 'json', got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(getattr(logging, v, None), int):
            msg = f"IONDID_LOG_LEVEL must be a valid Python log level, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("did_method")
    @classmethod
    def validate_did_method(cls, v: str) -> str:
        v = v.strip().lower()
        if not v or not v.isalnum():
            msg = f"IONDID_DID_METHOD must be a non-empty alphanumeric name, got '{v}'"
            raise ValueError(msg)
        return v


# Singleton, validated at import time.
settings = Settings()
