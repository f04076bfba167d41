"""
Link store module.

Implements the Strategy Pattern for pluggable durable storage of links.
"""

from .strategies import LinkStoreStrategy, InMemoryLinkStore, SQLAlchemyLinkStore
from .factory import LinkStoreFactory, StoreBackend

__all__ = [
    "LinkStoreStrategy",
    "InMemoryLinkStore",
    "SQLAlchemyLinkStore",
    "LinkStoreFactory",
    "StoreBackend",
]
