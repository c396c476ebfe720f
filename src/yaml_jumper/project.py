import logging
from collections.abc import Sequence
from pathlib import Path
from typing import cast

from yaml_jumper.cache import CacheStore
from yaml_jumper.indexer import YamlIndexer
from yaml_jumper.models import FileMeta, PathEntry, ValueEntry

logger = logging.getLogger("yaml_jumper")

YAML_EXTENSIONS = (".yaml", ".yml")


def is_yaml_file(path: Path) -> bool:
    return path.suffix.lower() in YAML_EXTENSIONS


def _walk(directory: Path, remaining_depth: int, found: list[Path]) -> None:
    try:
        children = sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("[project] Cannot list directory %s: %s", directory, exc)
        return

    for child in children:
        if child.name.startswith("."):
            continue
        if child.is_dir():
            if remaining_depth > 0:
                _walk(child, remaining_depth - 1, found)
        elif child.is_file() and is_yaml_file(child):
            found.append(child)


def find_yaml_files(root: Path, depth_limit: int) -> list[Path]:
    found: list[Path] = []
    _walk(root.resolve(), depth_limit, found)
    return found


def read_file_lines(path: Path, max_file_size: int) -> list[str]:
    try:
        size = path.stat().st_size
    except OSError as exc:
        logger.warning("[project] Error opening file %s: %s", path, exc)
        return []

    if size > max_file_size:
        logger.warning("[project] File too large to process: %s (%d > %d bytes)", path, size, max_file_size)
        return []

    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("[project] Error reading file %s: %s", path, exc)
        return []


class ProjectScanner:
    def __init__(
        self,
        indexer: YamlIndexer,
        cache: CacheStore,
        *,
        max_file_size: int = 1024 * 1024,
        depth_limit: int = 10,
    ) -> None:
        self._indexer = indexer
        self._cache = cache
        self._max_file_size = max_file_size
        self._depth_limit = depth_limit

    def find_files(self, root: Path) -> list[Path]:
        files = find_yaml_files(root, self._depth_limit)
        logger.debug("[ProjectScanner] root=%s, depth_limit=%d, files=%d", root, self._depth_limit, len(files))
        return files

    def read_lines(self, path: Path) -> list[str]:
        key = str(path.resolve())
        cached = self._cache.get("lines", key)
        if cached is not None:
            return cast("list[str]", cached)

        lines = read_file_lines(path, self._max_file_size)
        if lines:
            self._cache.set("lines", key, lines)
        return lines

    def collect_paths(self, files: Sequence[Path], root: Path) -> list[PathEntry]:
        all_paths: list[PathEntry] = []
        for file_path in files:
            lines = self.read_lines(file_path)
            if not lines:
                continue
            meta = FileMeta.from_path(file_path, root)
            all_paths.extend(entry.with_file(meta) for entry in self._indexer.get_paths(lines, meta.file_path))
        return all_paths

    def collect_values(self, files: Sequence[Path], root: Path) -> list[ValueEntry]:
        all_values: list[ValueEntry] = []
        for file_path in files:
            lines = self.read_lines(file_path)
            if not lines:
                continue
            meta = FileMeta.from_path(file_path, root)
            all_values.extend(entry.with_file(meta) for entry in self._indexer.get_values(lines, meta.file_path))
        return all_values

    def scan_paths(self, root: Path) -> list[PathEntry]:
        return self.collect_paths(self.find_files(root), root)

    def scan_values(self, root: Path) -> list[ValueEntry]:
        return self.collect_values(self.find_files(root), root)
