import logging
import time
from collections.abc import Sequence
from typing import cast

from yaml_jumper import extractor
from yaml_jumper.cache import CacheStore
from yaml_jumper.models import PathEntry, ValueEntry
from yaml_jumper.structured import StructuredStrategy
from yaml_jumper.types import Identity

logger = logging.getLogger("yaml_jumper")


class YamlIndexer:
    def __init__(
        self,
        cache: CacheStore,
        *,
        structured: StructuredStrategy | None = None,
        debug_performance: bool = False,
    ) -> None:
        self._cache = cache
        self._structured = structured
        self._debug_performance = debug_performance

    @property
    def cache(self) -> CacheStore:
        return self._cache

    def get_paths(self, lines: Sequence[str], key: Identity | None = None) -> list[PathEntry]:
        cached = self._cache.get("paths", key)
        if cached is not None:
            return cast("list[PathEntry]", cached)

        started = time.perf_counter()
        paths: list[PathEntry] | None = None
        source = "line scan"
        if self._structured is not None:
            paths = self._structured.try_extract(lines, key)
            source = "structured"
        if not paths:
            paths = extractor.get_paths(lines)
            source = "line scan"

        self._log_scan("get_paths", key, source, len(lines), len(paths), started)
        self._cache.set("paths", key, paths)
        return paths

    def get_values(self, lines: Sequence[str], key: Identity | None = None) -> list[ValueEntry]:
        cached = self._cache.get("values", key)
        if cached is not None:
            return cast("list[ValueEntry]", cached)

        started = time.perf_counter()
        values = extractor.get_values(lines)

        self._log_scan("get_values", key, "line scan", len(lines), len(values), started)
        self._cache.set("values", key, values)
        return values

    def find_keys_with_prefix(
        self,
        prefix: str,
        lines: Sequence[str],
        *,
        limit: int | None = None,
    ) -> list[PathEntry]:
        return extractor.find_keys_with_prefix(prefix, lines, limit=limit)

    def find_yaml_path(
        self,
        keys: Sequence[str],
        lines: Sequence[str],
        *,
        limit: int | None = None,
    ) -> list[PathEntry]:
        return extractor.find_yaml_path(keys, lines, limit=limit)

    def _log_scan(  # noqa: PLR0913
        self,
        operation: str,
        key: Identity | None,
        source: str,
        line_count: int,
        result_count: int,
        started: float,
    ) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.INFO if self._debug_performance else logging.DEBUG
        logger.log(
            level,
            "[YamlIndexer] %s: key=%s, source=%s, lines=%d, results=%d, elapsed=%.2fms",
            operation,
            key or "<unnamed>",
            source,
            line_count,
            result_count,
            elapsed_ms,
        )
