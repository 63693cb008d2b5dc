"""
Local fallback store

A key-value namespace with one row per resource kind. Each value is the
JSON-encoded collection (or the single Profile record), stored as text so a
corrupt entry can be detected on read instead of failing inside the driver.

The store is a best-effort cache owned by this client: writes overwrite the
whole value and there is no concurrency token, so two concurrent writers can
lose an update (last write wins).
"""
import json
import logging
from typing import Any, Optional

from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from portfolio.shared.database import Base, engine as default_engine
from portfolio.shared.errors import StorageError
from portfolio.shared.upsert import atomic_upsert

logger = logging.getLogger(__name__)

PROJECTS_KEY = "portfolio_projects"
PROFILE_KEY = "portfolio_profile"
MESSAGES_KEY = "portfolio_messages"


class LocalStoreEntry(Base):
    """
    One cached resource kind.

    Keys:
    - portfolio_projects: list of Project records
    - portfolio_profile: the Profile record
    - portfolio_messages: list of ContactMessage records
    """
    __tablename__ = "local_store"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class LocalStore:
    def __init__(self, bind: Engine = default_engine):
        self.bind = bind
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=bind)
        Base.metadata.create_all(bind=bind)

    def load(self, key: str) -> Optional[Any]:
        """
        Return the decoded value stored under key, or None if there is none.

        Raises:
            StorageError: If the store cannot be read or the value is not valid JSON
        """
        db = self.Session()
        try:
            entry = db.query(LocalStoreEntry).filter(LocalStoreEntry.key == key).first()
            if entry is None:
                return None
            return json.loads(entry.value)
        except SQLAlchemyError as e:
            raise StorageError(key, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise StorageError(key, f"corrupt JSON: {e}") from e
        finally:
            db.close()

    def save(self, key: str, value: Any) -> None:
        """
        Overwrite the value stored under key.

        Raises:
            StorageError: If the value cannot be written
        """
        db = self.Session()
        try:
            atomic_upsert(
                db=db,
                model=LocalStoreEntry,
                unique_field='key',
                unique_value=key,
                update_data={'value': json.dumps(value)}
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(key, f"{type(e).__name__}: {e}") from e
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.Session()
        try:
            db.query(LocalStoreEntry).filter(LocalStoreEntry.key == key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(key, f"{type(e).__name__}: {e}") from e
        finally:
            db.close()
