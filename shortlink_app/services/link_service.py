import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.config import Settings, settings as default_settings
from shortlink_app.errors import (
    CodeConflict,
    Expired,
    GenerationExhausted,
    InvalidUrl,
    NotFound,
    PasswordInvalid,
    PasswordMissing,
)
from shortlink_app.schemas.link import (
    LinkRecord,
    LinkStats,
    ResolveIntent,
    ResolveResult,
    ResolveStatus,
    as_utc,
)
from shortlink_app.services.access_gate import AccessGate
from shortlink_app.services.code_generator import CodeGenerator
from shortlink_app.storage.strategies import LinkStoreStrategy


_absolute_url = TypeAdapter(AnyUrl)


def is_valid_url(url: str) -> bool:
    """True if ``url`` parses as an absolute URL with a scheme"""
    if not url or not isinstance(url, str):
        return False
    try:
        _absolute_url.validate_python(url)
    except ValidationError:
        return False
    return True


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LinkService:
    """
    Link lifecycle: create, resolve (probe/commit), authenticate and stats.

    Dependencies are injected:
    - store: durable state; the only place click counts change
    - cache: optional, holds immutable record fields for faster resolves
    - generator / gate: code generation and password hashing

    The service keeps no mutable state of its own.
    """

    def __init__(
        self,
        store: LinkStoreStrategy,
        cache: Optional[CacheStrategy] = None,
        generator: Optional[CodeGenerator] = None,
        gate: Optional[AccessGate] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings or default_settings
        self.store = store
        self.cache = cache
        self.generator = generator or CodeGenerator.from_settings(self.settings)
        self.gate = gate or AccessGate(rounds=self.settings.password_hash_rounds)
        self.clock = clock or utc_now
        self.logger = logger or logging.getLogger(__name__)
        self.retry_limit = self.settings.retry_limit

    def short_url(self, code: str) -> str:
        """Display form of a short link: ``<display_domain>/<code>``"""
        return f"{self.settings.display_domain.rstrip('/')}/{code}"

    async def create(
        self,
        target_url: str,
        custom_code: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        password: Optional[str] = None,
    ) -> LinkRecord:
        """Create a new short link.

        Custom codes are used verbatim and fail with CodeConflict when taken.
        Generated codes are retried up to ``retry_limit`` times on collision,
        then fail with GenerationExhausted.

        Expiration dates in the past are accepted; such links resolve as
        expired straight away.

        Raises:
            InvalidUrl, CodeConflict, GenerationExhausted, StoreUnavailable
        """
        if not is_valid_url(target_url):
            raise InvalidUrl()

        password_hash = None
        if password:
            # bcrypt is deliberately slow, keep it off the event loop
            password_hash = await asyncio.to_thread(self.gate.hash, password)

        def build(code: str) -> LinkRecord:
            return LinkRecord(
                code=code,
                target_url=target_url,
                created_at=self.clock(),
                expires_at=as_utc(expires_at),
                password_hash=password_hash,
                password_protected=password_hash is not None,
                click_count=0,
            )

        if custom_code:
            record = build(custom_code)
            if not await self.store.insert_if_absent(record):
                self.logger.info("Custom code already in use: %s", custom_code)
                raise CodeConflict()
        else:
            record = await self._insert_generated(build)

        await self._cache_record(record)
        self.logger.info(
            "Created short link %s (protected=%s, expires_at=%s)",
            record.code, record.password_protected, record.expires_at,
        )
        return record

    async def _insert_generated(self, build: Callable[[str], LinkRecord]) -> LinkRecord:
        for attempt in range(1, self.retry_limit + 1):
            record = build(self.generator.generate())
            if await self.store.insert_if_absent(record):
                return record
            self.logger.debug("Generated code collided (attempt %d/%d): %s",
                              attempt, self.retry_limit, record.code)

        self.logger.error("No unique short code after %d attempts", self.retry_limit)
        raise GenerationExhausted(
            f"Could not generate a unique short code after {self.retry_limit} attempts"
        )

    async def resolve(
        self,
        code: str,
        password: Optional[str] = None,
        intent: ResolveIntent = ResolveIntent.COMMIT,
    ) -> ResolveResult:
        """Decide what happens when someone follows ``code``.

        Flow:
        1. Lookup (cache, then store) - NotFound if absent
        2. Expired links fail for every intent, no click recorded
        3. Protected links: PROBE answers PASSWORD_REQUIRED without
           touching the count; COMMIT verifies the password exactly once
        4. Atomically increment click_count in the store and redirect

        Raises:
            NotFound, Expired, PasswordMissing, PasswordInvalid, StoreUnavailable
        """
        record = await self._lookup(code)
        if record is None:
            raise NotFound()

        if record.is_expired(self.clock()):
            self.logger.info("Expired link requested: %s", code)
            raise Expired()

        if record.password_protected:
            if intent == ResolveIntent.PROBE:
                return ResolveResult(code=code, status=ResolveStatus.PASSWORD_REQUIRED)

            if not password:
                raise PasswordMissing()

            valid = await asyncio.to_thread(self.gate.verify, password, record.password_hash)
            if not valid:
                self.logger.warning("Invalid password for link %s", code)
                raise PasswordInvalid()

        click_count = await self.store.atomic_increment(code)
        if click_count is None:
            # Cached record whose row is gone from the store
            raise NotFound()

        return ResolveResult(
            code=code,
            status=ResolveStatus.REDIRECT,
            target_url=record.target_url,
            click_count=click_count,
        )

    async def authenticate(self, code: str, password: Optional[str]) -> ResolveResult:
        """Unlock a link with its password and count the click"""
        return await self.resolve(code, password=password, intent=ResolveIntent.COMMIT)

    async def get_stats(self, code: str) -> LinkStats:
        """Read-only statistics, always straight from the store

        Raises:
            NotFound, StoreUnavailable
        """
        record = await self.store.get_by_code(code)
        if record is None:
            raise NotFound()

        return LinkStats(
            code=record.code,
            target_url=record.target_url,
            click_count=record.click_count,
            created_at=record.created_at,
            expires_at=record.expires_at,
            password_protected=record.password_protected,
        )

    def _cache_key(self, code: str) -> str:
        return f"link:{code}"

    async def _cache_record(self, record: LinkRecord) -> None:
        if self.cache is not None:
            await self.cache.set(
                self._cache_key(record.code),
                record.model_dump_json(exclude={"click_count"}),
                ttl=self.settings.cache_ttl,
            )

    async def _lookup(self, code: str) -> Optional[LinkRecord]:
        """Cache-aside lookup. Cached records carry no click count."""
        if self.cache is not None:
            cached = await self.cache.get(self._cache_key(code))
            if cached:
                try:
                    return LinkRecord.model_validate_json(cached)
                except ValidationError:
                    self.logger.warning("Discarding unreadable cache entry for %s", code)

        record = await self.store.get_by_code(code)
        if record is not None:
            await self._cache_record(record)
        return record
