"""User model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ccswitch.data.models.base import BaseModel


class User(BaseModel):
    """Account that owns a partition of configuration records."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    api_key_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
