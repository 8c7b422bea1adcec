"""Time-bounded read-through cache of the model catalog."""
import asyncio
import time
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import RedisError

from llm_compass.core.cache import RedisClient
from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService
from llm_compass.providers.base import CatalogProvider
from llm_compass.providers.models import CachedCatalog

CATALOG_CACHE_KEY = "catalog"


class CatalogCache:
    """Owns the in-memory catalog snapshot.

    The cache is Fresh while the snapshot is younger than ``CATALOG_CACHE_TTL``
    and Stale/Empty otherwise. Refreshes are single-flight: concurrent callers
    that find the cache stale await one shared refresh task. Callers await it
    through ``asyncio.shield`` so a cancelled request leaves the refresh
    running and the snapshot intact.

    When the shared Redis layer is enabled, a refresh first tries the Redis
    copy and writes successful upstream fetches back to it.
    """

    def __init__(
        self,
        catalog_provider: CatalogProvider,
        cache: RedisClient,
        logger: LoggerService,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize catalog cache.

        Args:
            catalog_provider: Upstream catalog source
            cache: Shared Redis cache client (no-op when disabled)
            logger: Logger service instance
            settings: Application settings
            clock: Source of UNIX timestamps
        """
        self.catalog_provider = catalog_provider
        self.cache = cache
        self.logger = logger.get_logger(__name__)
        self.ttl = settings.CATALOG_CACHE_TTL
        self._clock = clock
        self._catalog: Optional[CachedCatalog] = None
        self._lock = asyncio.Lock()
        self._refresh_task: Optional["asyncio.Task[CachedCatalog]"] = None
        self._generation = 0

    def _is_fresh(self, fetched_at: float) -> bool:
        return self._clock() - fetched_at < self.ttl

    def peek(self) -> Optional[CachedCatalog]:
        """Return the cached catalog only if it is Fresh. Never fetches."""
        catalog = self._catalog
        if catalog is not None and self._is_fresh(catalog.fetched_at):
            return catalog
        return None

    async def get(self) -> CachedCatalog:
        """Return the Fresh catalog, refreshing it first when Stale/Empty.

        Raises:
            UpstreamFetchError: If the upstream catalog cannot be fetched
            CatalogParseError: If the upstream response is malformed
        """
        catalog = self.peek()
        if catalog is not None:
            self.logger.debug(
                "Using cached catalog",
                extra={
                    "model_count": len(catalog.models),
                    "age_seconds": round(self._clock() - catalog.fetched_at, 1),
                },
            )
            return catalog

        async with self._lock:
            catalog = self.peek()
            if catalog is not None:
                return catalog
            if self._refresh_task is None or self._refresh_task.done():
                self._refresh_task = asyncio.create_task(
                    self._refresh(self._generation)
                )
                self._refresh_task.add_done_callback(self._on_refresh_done)
            else:
                self.logger.debug("Joining in-flight catalog refresh")
            task = self._refresh_task

        return await asyncio.shield(task)

    async def invalidate(self) -> None:
        """Force the cache into Stale/Empty.

        An in-flight refresh is detached: its waiters still receive its result
        but the result is not stored.
        """
        self._generation += 1
        self._catalog = None
        self._refresh_task = None
        self.logger.info("Catalog cache invalidated")
        try:
            await self.cache.cache_delete(CATALOG_CACHE_KEY)
        except RedisError as e:
            self.logger.warning(
                "Failed to delete shared catalog copy",
                extra={"error": str(e), "error_type": type(e).__name__},
            )

    def _on_refresh_done(self, task: "asyncio.Task[CachedCatalog]") -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        # Mark the exception as retrieved when every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def _refresh(self, generation: int) -> CachedCatalog:
        catalog = await self._load_shared()
        if catalog is None:
            models = await self.catalog_provider.fetch()
            catalog = CachedCatalog(models=tuple(models), fetched_at=self._clock())
            await self._store_shared(catalog)

        if generation == self._generation:
            self._catalog = catalog
            self.logger.info(
                "Catalog cache refreshed",
                extra={"model_count": len(catalog.models), "ttl_seconds": self.ttl},
            )
        else:
            self.logger.info("Discarding catalog refreshed before invalidation")
        return catalog

    async def _load_shared(self) -> Optional[CachedCatalog]:
        try:
            raw = await self.cache.cache_get(CATALOG_CACHE_KEY)
        except RedisError as e:
            self.logger.warning(
                "Failed to read shared catalog copy",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return None
        if not raw:
            return None

        try:
            catalog = CachedCatalog.model_validate(raw)
        except PydanticValidationError as e:
            self.logger.warning(
                "Ignoring malformed shared catalog copy", extra={"error": str(e)}
            )
            return None
        if not self._is_fresh(catalog.fetched_at):
            return None

        self.logger.info(
            "Loaded catalog from shared cache",
            extra={"model_count": len(catalog.models)},
        )
        return catalog

    async def _store_shared(self, catalog: CachedCatalog) -> None:
        try:
            await self.cache.cache_set(
                CATALOG_CACHE_KEY,
                catalog.model_dump(mode="json"),
                expire=self.ttl,
            )
        except RedisError as e:
            self.logger.warning(
                "Failed to write shared catalog copy",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
