"""Schemas for provider API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ccswitch.data.models.provider import AppType, ProviderType


class ProviderCreate(BaseModel):
    """Provider create payload."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    provider_type: ProviderType = Field(ProviderType.CUSTOM, description="Provider type")
    api_key: str | None = Field(None, description="API key")
    base_url: str | None = Field(None, description="Base URL (custom providers only)")
    app_type: AppType = Field(AppType.CLAUDE, description="Tool the provider is for")
    enabled: bool = Field(True, description="Whether exports include the provider")
    model_settings: dict[str, Any] | None = Field(
        None, alias="model_config", description="Model settings, e.g. {'model': '...'}"
    )


class ProviderUpdate(BaseModel):
    """Provider update payload. Only given fields change."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    name: str | None = Field(None, min_length=1, max_length=255)
    provider_type: ProviderType | None = None
    api_key: str | None = None
    base_url: str | None = None
    app_type: AppType | None = None
    enabled: bool | None = None
    sort_order: int | None = None
    model_settings: dict[str, Any] | None = Field(None, alias="model_config")


class ProviderResponse(BaseModel):
    """Provider response payload."""

    model_config = ConfigDict(
        from_attributes=True, populate_by_name=True, protected_namespaces=()
    )

    id: int = Field(..., description="Provider id")
    name: str
    provider_type: ProviderType
    api_key: str | None = None
    base_url: str | None = None
    app_type: AppType
    enabled: bool
    sort_order: int
    model_settings: dict[str, Any] | None = Field(None, alias="model_config")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProviderPresetResponse(BaseModel):
    """Built-in provider preset."""

    index: int = Field(..., description="Preset index, used to apply it")
    name: str
    provider_type: ProviderType
    base_url: str | None = None
    app_type: AppType
