"""Repositories package."""

from ccswitch.data.repositories.base import BaseRepository, UserScopedRepository
from ccswitch.data.repositories.mcp_server import McpServerRepository
from ccswitch.data.repositories.optimize_history import PromptOptimizeHistoryRepository
from ccswitch.data.repositories.prompt import PromptRepository
from ccswitch.data.repositories.provider import ProviderRepository
from ccswitch.data.repositories.skill import SkillRepository, SkillsRepoRepository
from ccswitch.data.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "McpServerRepository",
    "PromptOptimizeHistoryRepository",
    "PromptRepository",
    "ProviderRepository",
    "SkillRepository",
    "SkillsRepoRepository",
    "UserRepository",
    "UserScopedRepository",
]
