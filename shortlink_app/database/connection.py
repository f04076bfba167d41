"""
SQLAlchemy engine and session factory for the link database.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from shortlink_app.config import settings


def build_engine(database_url: str):
    """Create an engine; SQLite needs cross-thread access for worker threads"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session and always close it"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
