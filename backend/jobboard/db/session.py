"""
SQLAlchemy engine and session factory.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from jobboard.core.config import settings

# SQLite connections are shared with FastAPI's threadpool workers
connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency function, use in FastAPI `Depends(get_db)`."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
