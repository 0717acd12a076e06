"""
Relational persistence gateway (SQLAlchemy async).

Each access method runs in its own short session and commits before
returning; there are no transactions spanning several calls.
"""
import functools
from typing import Any, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.core.config import Settings
from app.core.database import create_engine_from_settings, create_session_factory, init_db
from app.core.exceptions import CampusOpsError, ConflictError, DuplicateUsernameError, StorageError
from app.core.logging_config import logger
from app.storage.base import ENTITY_MODELS, Repository, Row, Storage


def translate_store_errors(func):
    """Surface driver/ORM failures as CampusOps errors, logging the cause"""

    @functools.wraps(func)
    async def wrapper(self: "DatabaseRepository", *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except CampusOpsError:
            raise
        except IntegrityError as e:
            logger.warning(
                f"[Storage] Integrity error in {self.name}.{func.__name__}: {e.orig}",
                extra={"event_type": "db_integrity_error", "db_table": self.name}
            )
            raise ConflictError("Request conflicts with existing data")
        except (SQLAlchemyError, OSError) as e:
            logger.log_error_with_context(e, context=f"{self.name}.{func.__name__}")
            raise StorageError()

    return wrapper


class DatabaseRepository(Repository):

    def __init__(self, name: str, storage: "DatabaseStorage"):
        super().__init__(name, storage)
        self.model = ENTITY_MODELS[name]

    def _to_row(self, obj) -> Row:
        return {column: getattr(obj, column) for column in self.columns}

    def _column(self, field: str):
        if field not in self.columns:
            raise ValueError(f"Unknown column for {self.name}: {field}")
        return getattr(self.model, field)

    async def _username_taken(self, session, values: Row, row_id: Optional[int] = None) -> bool:
        if self.name != "users" or "username" not in values:
            return False
        query = select(self.model.id).where(self.model.username == values["username"])
        if row_id is not None:
            query = query.where(self.model.id != row_id)
        result = await session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    @translate_store_errors
    async def get(self, row_id: int) -> Optional[Row]:
        async with self.storage.session() as session:
            obj = await session.get(self.model, row_id)
            return self._to_row(obj) if obj is not None else None

    @translate_store_errors
    async def list(self) -> List[Row]:
        async with self.storage.session() as session:
            result = await session.execute(select(self.model).order_by(self.model.id))
            return [self._to_row(obj) for obj in result.scalars().all()]

    @translate_store_errors
    async def list_by(self, field: str, value: Any, order_by: Optional[str] = None) -> List[Row]:
        query = select(self.model).where(self._column(field) == value)
        if order_by:
            query = query.order_by(self._column(order_by), self.model.id)
        else:
            query = query.order_by(self.model.id)

        async with self.storage.session() as session:
            result = await session.execute(query)
            return [self._to_row(obj) for obj in result.scalars().all()]

    @translate_store_errors
    async def exists_by(self, field: str, value: Any) -> bool:
        async with self.storage.session() as session:
            result = await session.execute(
                select(self.model.id).where(self._column(field) == value).limit(1)
            )
            return result.scalar_one_or_none() is not None

    @translate_store_errors
    async def _insert(self, values: Row) -> Row:
        async with self.storage.session() as session:
            if await self._username_taken(session, values):
                raise DuplicateUsernameError(values["username"])
            obj = self.model(**values)
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
            return self._to_row(obj)

    @translate_store_errors
    async def _update(self, row_id: int, values: Row) -> Optional[Row]:
        async with self.storage.session() as session:
            obj = await session.get(self.model, row_id)
            if obj is None:
                return None
            if await self._username_taken(session, values, row_id):
                raise DuplicateUsernameError(values["username"])
            for column, value in values.items():
                setattr(obj, column, value)
            await session.commit()
            await session.refresh(obj)
            return self._to_row(obj)

    @translate_store_errors
    async def _delete(self, row_id: int) -> bool:
        async with self.storage.session() as session:
            result = await session.execute(delete(self.model).where(self.model.id == row_id))
            await session.commit()
            return result.rowcount > 0


class DatabaseStorage(Storage):
    """Store backed by DATABASE_URL; nothing connects before startup()"""

    backend_name = "database"

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.settings = settings
        # Built in startup() unless one is handed in
        self.engine = engine
        self.session_factory = create_session_factory(engine) if engine is not None else None
        super().__init__()

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise StorageError("Database store has not been started")
        return self.session_factory()

    def create_repository(self, name: str) -> Repository:
        return DatabaseRepository(name, self)

    async def startup(self) -> None:
        if self.engine is None:
            self.engine = create_engine_from_settings(self.settings)
            self.session_factory = create_session_factory(self.engine)
        try:
            await init_db(self.engine)
        except (SQLAlchemyError, OSError) as e:
            logger.log_error_with_context(e, context="storage.startup")
            raise StorageError("Database is not reachable")
        logger.info("[Storage] Database tables ready")

    async def shutdown(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
