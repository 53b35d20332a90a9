"""Declarative base and column mixins shared by every table."""

from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import DateTime, ForeignKey, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """Declarative base; ``datetime`` annotations map to timezone-aware columns."""

    type_annotation_map: ClassVar[dict[type, Any]] = {
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """``created_at`` / ``updated_at`` columns filled by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class IDMixin:
    """Autoincrement integer primary key."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)


class UserOwnedMixin:
    """Scopes a row to exactly one user account."""

    @declared_attr
    def user_id(cls) -> Mapped[int]:  # noqa: N805
        return mapped_column(
            ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
        )


class BaseModel(Base, IDMixin, TimestampMixin):
    """Abstract base for concrete tables: id plus timestamps."""

    __abstract__ = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
