"""
Factory for creating link store instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
import logging

from .strategies import LinkStoreStrategy, InMemoryLinkStore, SQLAlchemyLinkStore
from shortlink_app.config import settings


logger = logging.getLogger(__name__)


class StoreBackend(Enum):
    """Available link store backends"""
    SQL = "sql"
    MEMORY = "memory"


class LinkStoreFactory:
    """
    Simple factory for creating link store instances.

    Gets configuration from settings (not passed as parameters).
    """

    _instance: LinkStoreStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: StoreBackend) -> LinkStoreStrategy:
        """
        Create or return cached link store instance.

        Args:
            backend: Type of store backend (from enum)

        Returns:
            Singleton link store instance
        """
        if cls._instance is not None:
            return cls._instance

        if backend == StoreBackend.SQL:
            from shortlink_app.database.connection import Base, SessionLocal, engine

            # Importing the model registers the links table on Base
            import shortlink_app.models  # noqa: F401
            Base.metadata.create_all(bind=engine)

            cls._instance = SQLAlchemyLinkStore(session_factory=SessionLocal)
            logger.info("SQL link store initialized (%s)", engine.url.render_as_string(hide_password=True))

        elif backend == StoreBackend.MEMORY:
            cls._instance = InMemoryLinkStore()
            logger.info("In-memory link store initialized")

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
