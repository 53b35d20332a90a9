"""Prompt optimization history model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ccswitch.data.models.base import BaseModel, UserOwnedMixin


class PromptOptimizeHistory(UserOwnedMixin, BaseModel):
    """One completed prompt rewrite or evaluation."""

    __tablename__ = "prompt_optimize_history"

    original_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    optimized_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    template: Mapped[str] = mapped_column(String(100), nullable=False)
    mode: Mapped[str] = mapped_column(String(20), nullable=False, default="system")
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    analysis: Mapped[str | None] = mapped_column(Text, nullable=True)
