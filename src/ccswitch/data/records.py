"""Plain record shapes shared by export, import and the config assemblers.

These mirror the persisted rows without the internal ``id``, ``user_id``
and timestamp columns. They validate both ORM instances (``from_attributes``)
and JSON dictionaries read from exported files.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.models.prompt import TargetFile
from ccswitch.data.models.provider import AppType, ProviderType

INTERNAL_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class RecordBase(BaseModel):
    """Common configuration for record shapes."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        protected_namespaces=(),
        extra="ignore",
    )

    def to_export_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dictionary written to export files."""
        return self.model_dump(mode="json", by_alias=True)


class ProviderRecord(RecordBase):
    """Provider fields without internal columns."""

    name: str = Field(..., min_length=1, max_length=255)
    provider_type: ProviderType = ProviderType.CUSTOM
    api_key: str | None = None
    base_url: str | None = None
    app_type: AppType = AppType.CLAUDE
    enabled: bool = True
    sort_order: int = 0
    model_settings: dict[str, Any] | None = Field(default=None, alias="model_config")

    @property
    def model_id(self) -> str | None:
        """Model identifier from ``model_config``, if one is set."""
        if self.model_settings:
            model = self.model_settings.get("model")
            if model:
                return str(model)
        return None


class McpServerRecord(RecordBase):
    """MCP server fields without internal columns."""

    name: str = Field(..., min_length=1, max_length=255)
    transport_type: TransportType = TransportType.STDIO
    command: str | None = None
    url: str | None = None
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    app_bindings: list[AppType] = Field(default_factory=list)
    enabled: bool = True

    @field_validator("args", "app_bindings", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("env", mode="before")
    @classmethod
    def _none_to_dict(cls, value: Any) -> Any:
        return {} if value is None else value


class PromptRecord(RecordBase):
    """Prompt fields without internal columns."""

    name: str = Field(..., min_length=1, max_length=255)
    target_file: TargetFile = TargetFile.CLAUDE
    content: str = ""
    is_active: bool = False

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class SkillsRepoRecord(RecordBase):
    """Skills repository fields without internal columns."""

    owner: str = Field(..., min_length=1, max_length=100)
    repo: str = Field(..., min_length=1, max_length=100)
    branch: str = "main"
    subdirectory: str | None = None
    is_default: bool = False


class SkillRecord(RecordBase):
    """Skill fields without internal columns or the owning repository."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    installed: bool = False


def strip_internal_fields(
    row: dict[str, Any], extra: frozenset[str] | set[str] = frozenset()
) -> dict[str, Any]:
    """Drop ``id``, ``user_id`` and timestamps (plus ``extra``) from a row."""
    hidden = INTERNAL_FIELDS | extra
    return {key: value for key, value in row.items() if key not in hidden}
