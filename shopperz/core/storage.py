"""
Durable key-value storage
Mirrors browser local storage: string values under string keys, surviving restarts
"""

import redis
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional
import logging

from sqlalchemy import create_engine, Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import NullPool

from .config import Settings

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
    pass

class StorageEntry(Base):
    """One persisted key"""

    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

class KeyValueStorage(ABC):
    """Interface shared by all storage backends"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    def close(self) -> None:
        pass

class MemoryStorage(KeyValueStorage):
    """In-process storage, lost on restart"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

class SQLStorage(KeyValueStorage):
    """SQLAlchemy-backed storage (SQLite by default)"""

    def __init__(self, database_url: str, echo: bool = False):
        if database_url.startswith("sqlite"):
            # SQLite doesn't support connection pooling parameters
            self.engine = create_engine(database_url, echo=echo, poolclass=NullPool)
        else:
            self.engine = create_engine(database_url, echo=echo, pool_pre_ping=True)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(self.engine, autoflush=False, expire_on_commit=False)

    def get(self, key: str) -> Optional[str]:
        with self.SessionLocal() as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self.SessionLocal() as session:
            session.merge(StorageEntry(key=key, value=value))
            session.commit()

    def delete(self, key: str) -> None:
        with self.SessionLocal() as session:
            entry = session.get(StorageEntry, key)
            if entry:
                session.delete(entry)
                session.commit()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Storage database connections closed")

class RedisStorage(KeyValueStorage):
    """Redis-backed storage"""

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self.redis_client = client or redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True
        )

    def get(self, key: str) -> Optional[str]:
        return self.redis_client.get(key)

    def set(self, key: str, value: str) -> None:
        self.redis_client.set(key, value)

    def delete(self, key: str) -> None:
        self.redis_client.delete(key)

    def close(self) -> None:
        self.redis_client.close()
        logger.info("Redis connection closed")

def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the storage backend selected by STORAGE_BACKEND"""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "redis":
        return RedisStorage(settings.REDIS_URL)
    if backend == "sql":
        return SQLStorage(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
