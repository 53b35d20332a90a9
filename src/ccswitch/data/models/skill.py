"""Skill and skills repository models."""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ccswitch.data.models.base import BaseModel, UserOwnedMixin


class SkillsRepo(UserOwnedMixin, BaseModel):
    """GitHub repository that skills are discovered from."""

    __tablename__ = "skills_repos"

    owner: Mapped[str] = mapped_column(String(100), nullable=False)
    repo: Mapped[str] = mapped_column(String(100), nullable=False)
    branch: Mapped[str] = mapped_column(String(50), nullable=False, default="main")
    subdirectory: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def full_name(self) -> str:
        """Return ``owner/repo``."""
        return f"{self.owner}/{self.repo}"


class Skill(UserOwnedMixin, BaseModel):
    """Capability bundle discovered in a skills repository."""

    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    installed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    repo_id: Mapped[int | None] = mapped_column(
        ForeignKey("skills_repos.id", ondelete="CASCADE"), nullable=True
    )
