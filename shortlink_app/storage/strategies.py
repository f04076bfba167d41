"""
Link store strategies using Strategy Pattern.

The service talks to durable state only through three primitives, each of
which must be a single atomic operation on the backend:

- insert_if_absent: create a record unless its code is taken
- get_by_code: point lookup
- atomic_increment: add to click_count without a read-modify-write

Implementations:
- InMemoryLinkStore: development/testing
- SQLAlchemyLinkStore: any SQLAlchemy-supported database (SQLite, PostgreSQL, ...)
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import asyncio
import logging
import threading

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from shortlink_app.errors import StoreUnavailable
from shortlink_app.models.link import Link
from shortlink_app.schemas.link import LinkRecord


logger = logging.getLogger(__name__)


class LinkStoreStrategy(ABC):
    """
    Abstract base class for link stores.

    All methods are async because real backends do I/O. Backend failures
    must surface as ``StoreUnavailable``; the service never retries them.
    """

    @abstractmethod
    async def insert_if_absent(self, record: LinkRecord) -> bool:
        """
        Atomically insert ``record`` unless ``record.code`` already exists.

        Returns:
            True if inserted, False if the code was taken
        """
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[LinkRecord]:
        """Return the record for ``code`` or None"""
        pass

    @abstractmethod
    async def atomic_increment(self, code: str, amount: int = 1) -> Optional[int]:
        """
        Atomically add ``amount`` to the record's click_count.

        Returns:
            The new click_count, or None if ``code`` does not exist
        """
        pass


class InMemoryLinkStore(LinkStoreStrategy):
    """
    Dict-backed store.

    Each primitive is a single critical section with no await inside it,
    so it is atomic on the event loop; the lock covers threaded callers.
    Nothing slow ever runs under the lock.

    Lost on restart, not shared between processes.
    """

    def __init__(self):
        self._records: Dict[str, LinkRecord] = {}
        self._lock = threading.Lock()

    async def insert_if_absent(self, record: LinkRecord) -> bool:
        with self._lock:
            if record.code in self._records:
                return False
            self._records[record.code] = record.model_copy()
            return True

    async def get_by_code(self, code: str) -> Optional[LinkRecord]:
        with self._lock:
            record = self._records.get(code)
            return record.model_copy() if record is not None else None

    async def atomic_increment(self, code: str, amount: int = 1) -> Optional[int]:
        with self._lock:
            record = self._records.get(code)
            if record is None:
                return None
            record.click_count += amount
            return record.click_count

    def __len__(self) -> int:
        return len(self._records)


class SQLAlchemyLinkStore(LinkStoreStrategy):
    """
    Relational store backed by the ``links`` table.

    - insert_if_absent is a plain INSERT; the unique constraint on
      ``code`` rejects duplicates, even between concurrent writers
    - atomic_increment is ``UPDATE ... SET click_count = click_count + n``,
      evaluated by the database

    SQLAlchemy sessions are blocking, so each call runs in a worker thread
    with its own short-lived session.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def insert_if_absent(self, record: LinkRecord) -> bool:
        return await asyncio.to_thread(self._insert_if_absent, record)

    async def get_by_code(self, code: str) -> Optional[LinkRecord]:
        return await asyncio.to_thread(self._get_by_code, code)

    async def atomic_increment(self, code: str, amount: int = 1) -> Optional[int]:
        return await asyncio.to_thread(self._atomic_increment, code, amount)

    def _insert_if_absent(self, record: LinkRecord) -> bool:
        with self.session_factory() as db:
            db.add(Link(**record.model_dump()))
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.debug("Insert rejected, code already exists: %s", record.code)
                return False
            except SQLAlchemyError as e:
                db.rollback()
                raise StoreUnavailable(f"Failed to insert link: {e}") from e
        return True

    def _get_by_code(self, code: str) -> Optional[LinkRecord]:
        with self.session_factory() as db:
            try:
                row = db.execute(select(Link).where(Link.code == code)).scalar_one_or_none()
            except SQLAlchemyError as e:
                raise StoreUnavailable(f"Failed to read link: {e}") from e

            if row is None:
                return None
            return LinkRecord.model_validate(row)

    def _atomic_increment(self, code: str, amount: int) -> Optional[int]:
        with self.session_factory() as db:
            try:
                result = db.execute(
                    update(Link)
                    .where(Link.code == code)
                    .values(click_count=Link.click_count + amount)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    db.rollback()
                    return None

                # Same transaction still holds the row lock, so this is our value
                new_count = db.execute(
                    select(Link.click_count).where(Link.code == code)
                ).scalar_one()
                db.commit()
                return new_count

            except SQLAlchemyError as e:
                db.rollback()
                raise StoreUnavailable(f"Failed to increment clicks: {e}") from e
