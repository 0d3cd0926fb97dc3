"""Configuration models for Porefect CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_ENDPOINT = "https://porefect-production.up.railway.app/api"


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    timeout: int = Field(default=30)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class UIConfig(BaseModel):
    """UI configuration."""

    default_view: Literal["list", "calendar"] = Field(default="list")


class Config(BaseModel):
    """Main configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
