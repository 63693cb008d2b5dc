"""
Database configuration and session management for the local fallback store

This module provides the basic SQLAlchemy setup for the local store.
The store model itself lives in portfolio.shared.local_store.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, StaticPool

from portfolio.shared.config import LOCAL_STORE_URL

# Base class for ORM models
Base = declarative_base()


def make_engine(url: str) -> Engine:
    """
    Create an engine for the local store.

    In-memory SQLite needs a single shared connection, otherwise every
    session would see its own empty database.
    """
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    # Using NullPool for better compatibility with containerized environments
    return create_engine(url, poolclass=NullPool, connect_args=connect_args, echo=False)


engine = make_engine(LOCAL_STORE_URL)


def check_db_connection(bind: Engine = engine) -> bool:
    """
    Test database connectivity
    Returns True if connection successful, False otherwise
    """
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
