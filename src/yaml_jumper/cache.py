import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import get_args

from yaml_jumper.types import Identity, StoreName

logger = logging.getLogger("yaml_jumper")

STORE_NAMES: tuple[StoreName, ...] = get_args(StoreName.__value__)


@dataclass(frozen=True, slots=True)
class CacheRecord:
    store: StoreName
    key: Identity
    value: object
    timestamp: float


class CacheStore:
    """Per-store, per-file TTL cache of scan results.

    Expiry is logical: a stale record is reported as absent but stays in memory
    until it is overwritten or cleared.
    """

    def __init__(
        self,
        *,
        ttl: float = 30.0,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.enabled = enabled
        self._clock = clock
        self._stores: dict[StoreName, dict[Identity, CacheRecord]] = {name: {} for name in STORE_NAMES}

    def get(self, store: StoreName, key: Identity | None) -> object | None:
        if not self.enabled or not key:
            return None

        record = self._stores.get(store, {}).get(key)
        if record is None:
            return None

        if self._clock() - record.timestamp >= self.ttl:
            logger.debug("[CacheStore] expired: store=%s, key=%s", store, key)
            return None

        logger.debug("[CacheStore] hit: store=%s, key=%s", store, key)
        return record.value

    def set(self, store: StoreName, key: Identity | None, value: object) -> None:
        if not self.enabled or not key:
            return

        self._stores.setdefault(store, {})[key] = CacheRecord(
            store=store,
            key=key,
            value=value,
            timestamp=self._clock(),
        )

    def clear(self, key: Identity | None = None) -> None:
        if key is None:
            logger.debug("[CacheStore] cleared all stores")
            self._stores = {name: {} for name in STORE_NAMES}
            return

        logger.debug("[CacheStore] cleared: key=%s", key)
        for records in self._stores.values():
            records.pop(key, None)

    def reset(self) -> None:
        self.clear(None)

    def record(self, store: StoreName, key: Identity) -> CacheRecord | None:
        return self._stores.get(store, {}).get(key)
