"""Generic async CRUD repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from ccswitch.data.models.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    CRUD helpers for one mapped class.

    Args:
        model: Mapped class the repository reads and writes.
        session: Async session used for every statement.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    def _select(self) -> Select[tuple[ModelType]]:
        """Base query every read starts from."""
        return select(self.model)

    async def create(self, **kwargs: Any) -> ModelType:
        """Insert a row, commit, and return it refreshed."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.commit()
        await self.session.refresh(instance)
        return instance

    async def stage(self, **kwargs: Any) -> ModelType:
        """
        Insert a row and flush it without committing.

        The caller owns the transaction; batch imports wrap each call in
        a savepoint.
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def get_by_id(self, id_: int) -> ModelType | None:
        """Row with this primary key, or None."""
        result = await self.session.execute(self._select().where(self.model.id == id_))
        return result.scalar_one_or_none()

    async def update(self, id_: int, **kwargs: Any) -> ModelType | None:
        """
        Set the given attributes on a row and commit.

        Unknown attribute names are ignored.

        Returns:
            The refreshed row, or None if it does not exist.
        """
        instance = await self.get_by_id(id_)
        if instance is None:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.commit()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id_: int) -> bool:
        """Delete a row and commit. Returns False when it does not exist."""
        instance = await self.get_by_id(id_)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.commit()
        return True

    async def count(self) -> int:
        """Number of rows visible to this repository."""
        query = select(func.count()).select_from(self._select().subquery())
        result = await self.session.execute(query)
        return int(result.scalar_one())


class UserScopedRepository(BaseRepository[ModelType]):
    """
    Repository restricted to the rows of one user.

    Reads filter on ``user_id``; writes force it, so a caller can never
    move a row into another partition.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession, user_id: int) -> None:
        super().__init__(model, session)
        self.user_id = user_id

    def _select(self) -> Select[tuple[ModelType]]:
        return select(self.model).where(self.model.user_id == self.user_id)  # type: ignore[attr-defined]

    async def create(self, **kwargs: Any) -> ModelType:
        kwargs["user_id"] = self.user_id
        return await super().create(**kwargs)

    async def stage(self, **kwargs: Any) -> ModelType:
        kwargs["user_id"] = self.user_id
        return await super().stage(**kwargs)

    async def update(self, id_: int, **kwargs: Any) -> ModelType | None:
        kwargs.pop("user_id", None)
        return await super().update(id_, **kwargs)
