import logging

from yaml_jumper.cache import CacheStore
from yaml_jumper.errors import LineParseError
from yaml_jumper.host import CURRENT_BUFFER, TextHost
from yaml_jumper.line_classifier import split_value_line
from yaml_jumper.types import Identity, PromptFn

logger = logging.getLogger("yaml_jumper")


class ValueEditor:
    def __init__(self, host: TextHost, cache: CacheStore) -> None:
        self._host = host
        self._cache = cache

    def _resolve_buffer(self, file_identity: Identity | None) -> Identity:
        current = self._host.get_buffer_name()
        if file_identity is None or file_identity in {CURRENT_BUFFER, current}:
            return current or CURRENT_BUFFER

        existing = self._host.find_buffer(file_identity)
        if existing is not None:
            return existing
        return self._host.load_buffer(file_identity)

    def edit_value(self, file_identity: Identity | None, line_num: int, prompt_fn: PromptFn) -> bool:
        try:
            identity = self._resolve_buffer(file_identity)
            lines = self._host.read_lines(identity)
        except OSError as exc:
            logger.warning("[ValueEditor] Cannot open %s: %s", file_identity or CURRENT_BUFFER, exc)
            self._host.notify(f"Cannot open file: {file_identity}", logging.ERROR)
            return False

        if not 1 <= line_num <= len(lines):
            self._host.notify(f"Line {line_num} is out of range", logging.ERROR)
            return False

        try:
            prefix, value = split_value_line(lines[line_num - 1], line_num=line_num)
        except LineParseError as exc:
            logger.warning("[ValueEditor] %s: %s", identity, exc)
            self._host.notify(exc.message, logging.ERROR)
            return False

        new_value = prompt_fn("New value: ", value)
        if new_value is None or new_value == value:
            return False

        self._host.replace_line(identity, line_num, f"{prefix} {new_value}")
        self._cache.clear(identity)
        logger.debug("[ValueEditor] %s:%d updated %r -> %r", identity, line_num, value, new_value)
        self._host.notify("Value updated", logging.INFO)
        return True
