"""Provider model."""

from __future__ import annotations

from enum import Enum
from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column

from ccswitch.data.models.base import BaseModel, UserOwnedMixin


class AppType(str, Enum):
    """AI command-line tool a record is bound to."""

    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"
    OPENCODE = "opencode"


class ProviderType(str, Enum):
    """How a provider authenticates against its backend."""

    OFFICIAL = "official"
    PACKYCODE = "packycode"
    CUSTOM = "custom"


OFFICIAL_BASE_URLS: dict[AppType, str] = {
    AppType.CLAUDE: "https://api.anthropic.com",
    AppType.CODEX: "https://api.openai.com/v1",
    AppType.GEMINI: "https://generativelanguage.googleapis.com",
    AppType.OPENCODE: "https://api.openai.com/v1",
}

PACKYCODE_BASE_URL = "https://api.packycode.com"


def derive_base_url(
    provider_type: ProviderType, app_type: AppType, base_url: str | None = None
) -> str | None:
    """Return the base URL a provider should carry.

    Official and PackyCode providers always point at a fixed endpoint;
    custom providers keep whatever URL they were given.
    """
    if provider_type == ProviderType.OFFICIAL:
        return OFFICIAL_BASE_URLS[app_type]
    if provider_type == ProviderType.PACKYCODE:
        return PACKYCODE_BASE_URL
    return base_url


class Provider(UserOwnedMixin, BaseModel):
    """Credentials and endpoint for one AI command-line tool."""

    __tablename__ = "providers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    provider_type: Mapped[ProviderType] = mapped_column(
        SqlEnum(
            ProviderType,
            name="provider_type",
            values_callable=lambda obj: [item.value for item in obj],
        ),
        nullable=False,
        default=ProviderType.CUSTOM,
    )
    api_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    base_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    app_type: Mapped[AppType] = mapped_column(
        SqlEnum(
            AppType,
            name="app_type",
            values_callable=lambda obj: [item.value for item in obj],
        ),
        nullable=False,
        default=AppType.CLAUDE,
    )
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    model_config: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    @property
    def model_id(self) -> str | None:
        """Model identifier from ``model_config``, if one is set."""
        if isinstance(self.model_config, dict):
            model = self.model_config.get("model")
            if model:
                return str(model)
        return None
