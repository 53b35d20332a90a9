"""Data models package."""

from ccswitch.data.models.base import Base, TimestampMixin, UserOwnedMixin
from ccswitch.data.models.mcp_server import McpServer, TransportType
from ccswitch.data.models.optimize_history import PromptOptimizeHistory
from ccswitch.data.models.prompt import Prompt, TargetFile
from ccswitch.data.models.provider import AppType, Provider, ProviderType, derive_base_url
from ccswitch.data.models.skill import Skill, SkillsRepo
from ccswitch.data.models.user import User

__all__ = [
    "AppType",
    "Base",
    "McpServer",
    "Prompt",
    "PromptOptimizeHistory",
    "Provider",
    "ProviderType",
    "Skill",
    "SkillsRepo",
    "TargetFile",
    "TimestampMixin",
    "TransportType",
    "User",
    "UserOwnedMixin",
    "derive_base_url",
]
