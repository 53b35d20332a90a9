"""Prompt model."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Boolean, String, Text
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column

from ccswitch.data.models.base import BaseModel, UserOwnedMixin


class TargetFile(str, Enum):
    """Instruction file a prompt is written to."""

    CLAUDE = "CLAUDE.md"
    AGENTS = "AGENTS.md"
    GEMINI = "GEMINI.md"
    OPENCODE = "OPENCODE.md"


class Prompt(UserOwnedMixin, BaseModel):
    """Named Markdown instruction block for one tool."""

    __tablename__ = "prompts"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_file: Mapped[TargetFile] = mapped_column(
        SqlEnum(
            TargetFile,
            name="target_file",
            values_callable=lambda obj: [item.value for item in obj],
        ),
        nullable=False,
        default=TargetFile.CLAUDE,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
