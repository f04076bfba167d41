"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the link store, the record
cache and the link service that are injected into routes.

Swap implementations through settings; override ``get_link_service`` in tests.
"""

from functools import lru_cache

from fastapi import Depends

from shortlink_app.cache.factory import CacheFactory, CacheBackend
from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.storage.factory import LinkStoreFactory, StoreBackend
from shortlink_app.storage.strategies import LinkStoreStrategy
from shortlink_app.services.link_service import LinkService
from shortlink_app.config import settings


@lru_cache()
def get_store() -> LinkStoreStrategy:
    """
    Get link store instance (singleton).

    Returns:
        LinkStoreStrategy instance based on settings
    """
    backend = StoreBackend(settings.store_backend)
    return LinkStoreFactory.create(backend)


@lru_cache()
def get_cache() -> CacheStrategy:
    """
    Get cache instance (singleton).

    Returns:
        CacheStrategy instance based on settings
    """
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


def get_link_service(
    store: LinkStoreStrategy = Depends(get_store),
    cache: CacheStrategy = Depends(get_cache),
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Routes depend on the service only; the service depends on
    infrastructure (store, cache).
    """
    return LinkService(store=store, cache=cache, settings=settings)
