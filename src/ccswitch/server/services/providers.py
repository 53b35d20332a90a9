"""Service for managing providers."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.provider import AppType, Provider, ProviderType, derive_base_url
from ccswitch.data.repositories.provider import ProviderRepository
from ccswitch.server.services.base import RecordNotFoundError, UserScopedService

logger = logging.getLogger(__name__)

PROVIDER_PRESETS: list[dict[str, Any]] = [
    {
        "name": "Official Login",
        "provider_type": ProviderType.OFFICIAL,
        "base_url": None,
        "app_type": AppType.CLAUDE,
    },
    {
        "name": "PackyCode",
        "provider_type": ProviderType.PACKYCODE,
        "base_url": "https://api.packycode.com",
        "app_type": AppType.CLAUDE,
    },
    {
        "name": "Custom",
        "provider_type": ProviderType.CUSTOM,
        "base_url": None,
        "app_type": AppType.CLAUDE,
    },
]

# Columns copied when a provider is duplicated
_COPY_FIELDS = (
    "provider_type",
    "api_key",
    "base_url",
    "app_type",
    "enabled",
    "model_config",
)


class ProviderService(UserScopedService):
    """Service for a user's providers."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        super().__init__(session, user_id)
        self.repo = ProviderRepository(session, user_id)

    async def list_providers(self) -> list[Provider]:
        """List providers in display order."""
        return await self.repo.list_all()

    async def get_provider(self, provider_id: int) -> Provider | None:
        """Get a provider by ID."""
        return await self.repo.get_by_id(provider_id)

    async def create_provider(self, **fields: Any) -> Provider:
        """
        Create a provider at the end of the display order.

        The base URL of official and PackyCode providers is derived from
        the provider and app types; any given value is replaced.
        """
        provider_type = ProviderType(fields.get("provider_type") or ProviderType.CUSTOM)
        app_type = AppType(fields.get("app_type") or AppType.CLAUDE)
        fields["provider_type"] = provider_type
        fields["app_type"] = app_type
        fields["base_url"] = derive_base_url(provider_type, app_type, fields.get("base_url"))
        fields["sort_order"] = await self.repo.count()

        provider = await self.repo.create(**fields)
        logger.info(f"Created provider {provider.id} ({provider.name}) for user {self.user_id}")
        return provider

    async def update_provider(self, provider_id: int, **fields: Any) -> Provider | None:
        """
        Update a provider.

        Changing the provider or app type re-derives the base URL.
        """
        provider = await self.repo.get_by_id(provider_id)
        if provider is None:
            return None

        if "provider_type" in fields or "app_type" in fields:
            provider_type = ProviderType(fields.get("provider_type") or provider.provider_type)
            app_type = AppType(fields.get("app_type") or provider.app_type)
            fields["base_url"] = derive_base_url(
                provider_type, app_type, fields.get("base_url", provider.base_url)
            )
        elif provider.provider_type != ProviderType.CUSTOM:
            # derived URLs are read-only
            fields.pop("base_url", None)

        return await self.repo.update(provider_id, **fields)

    async def delete_provider(self, provider_id: int) -> bool:
        """Delete a provider."""
        deleted = await self.repo.delete(provider_id)
        if deleted:
            logger.info(f"Deleted provider {provider_id} for user {self.user_id}")
        return deleted

    async def duplicate_provider(self, provider_id: int) -> Provider:
        """
        Copy a provider into a new row named ``"<name> (copy)"``.

        Raises:
            RecordNotFoundError: If the provider does not exist
        """
        source = await self.repo.get_by_id(provider_id)
        if source is None:
            raise RecordNotFoundError("Provider", provider_id)

        fields = {name: getattr(source, name) for name in _COPY_FIELDS}
        fields["name"] = f"{source.name} (copy)"
        fields["sort_order"] = await self.repo.count()
        return await self.repo.create(**fields)

    async def set_enabled(self, provider_id: int, enabled: bool) -> Provider | None:
        """Enable or disable a provider."""
        return await self.repo.update(provider_id, enabled=enabled)

    async def apply_preset(self, index: int) -> Provider:
        """
        Create a provider from one of the built-in presets.

        Raises:
            IndexError: If no preset exists at ``index``
        """
        if not 0 <= index < len(PROVIDER_PRESETS):
            raise IndexError(f"No provider preset at index {index}")
        return await self.create_provider(**dict(PROVIDER_PRESETS[index]))
