# Persistence gateway

from app.core.config import Settings
from app.storage.base import ENTITY_MODELS, REFERENCES, Repository, Row, Storage
from app.storage.memory import InMemoryStorage


def create_storage(settings: Settings) -> Storage:
    """Build the store named by STORAGE_BACKEND"""
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryStorage()

    if not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set but STORAGE_BACKEND=database")

    from app.storage.database import DatabaseStorage
    return DatabaseStorage(settings)


__all__ = [
    "ENTITY_MODELS",
    "REFERENCES",
    "Repository",
    "Row",
    "Storage",
    "InMemoryStorage",
    "create_storage",
]
