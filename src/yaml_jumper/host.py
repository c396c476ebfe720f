import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from yaml_jumper.types import Identity, PromptFn

logger = logging.getLogger("yaml_jumper")

# Identity of whatever buffer currently has focus
CURRENT_BUFFER: Identity = "current"


class TextHost(Protocol):
    def read_lines(self, identity: Identity) -> list[str]: ...

    def get_buffer_name(self) -> str: ...

    def replace_line(self, identity: Identity, line_num: int, text: str) -> None: ...

    def move_cursor(self, identity: Identity, line_num: int) -> None: ...

    def find_buffer(self, identity: Identity) -> Identity | None: ...

    def load_buffer(self, identity: Identity) -> Identity: ...

    def open_buffer(self, identity: Identity) -> None: ...

    def prompt(self, text: str, default: str) -> str | None: ...

    def notify(self, message: str, level: int) -> None: ...

    def subscribe_save(self, callback: Callable[[Identity], None]) -> None: ...


def _normalize(identity: Identity) -> Identity:
    return str(Path(identity).resolve())


class BufferHost:
    """In-memory buffers backed by files on disk.

    Loading a buffer never moves focus; only ``open_buffer`` does.
    """

    def __init__(self, *, prompt_fn: PromptFn | None = None) -> None:
        self.buffers: dict[Identity, list[str]] = {}
        self.cursors: dict[Identity, int] = {}
        self.notifications: list[tuple[int, str]] = []
        self.current: Identity | None = None
        self._prompt_fn = prompt_fn
        self._save_callbacks: list[Callable[[Identity], None]] = []

    def _resolve(self, identity: Identity | None) -> Identity:
        if identity is None or identity == CURRENT_BUFFER:
            if self.current is None:
                msg = "No buffer has focus"
                raise LookupError(msg)
            return self.current
        return _normalize(identity)

    def read_lines(self, identity: Identity) -> list[str]:
        name = self._resolve(identity)
        if name in self.buffers:
            return list(self.buffers[name])
        return Path(name).read_text(encoding="utf-8").splitlines()

    def get_buffer_name(self) -> str:
        return self.current or ""

    def replace_line(self, identity: Identity, line_num: int, text: str) -> None:
        name = self._resolve(identity)
        lines = self.buffers.get(name)
        if lines is None:
            lines = self.buffers[self.load_buffer(name)]
        if not 1 <= line_num <= len(lines):
            msg = f"Line {line_num} is out of range for '{name}' ({len(lines)} lines)"
            raise IndexError(msg)
        lines[line_num - 1] = text

    def move_cursor(self, identity: Identity, line_num: int) -> None:
        self.cursors[self._resolve(identity)] = line_num

    def find_buffer(self, identity: Identity) -> Identity | None:
        name = self._resolve(identity)
        if name in self.buffers:
            return name
        return None

    def load_buffer(self, identity: Identity) -> Identity:
        name = self._resolve(identity)
        if name not in self.buffers:
            self.buffers[name] = Path(name).read_text(encoding="utf-8").splitlines()
            logger.debug("[BufferHost] loaded buffer: %s (%d lines)", name, len(self.buffers[name]))
        return name

    def open_buffer(self, identity: Identity) -> None:
        self.current = self.load_buffer(identity)

    def prompt(self, text: str, default: str) -> str | None:
        if self._prompt_fn is None:
            return None
        return self._prompt_fn(text, default)

    def notify(self, message: str, level: int) -> None:
        self.notifications.append((level, message))
        logger.log(level, "[BufferHost] %s", message)

    def subscribe_save(self, callback: Callable[[Identity], None]) -> None:
        self._save_callbacks.append(callback)

    def save(self, identity: Identity = CURRENT_BUFFER) -> None:
        name = self._resolve(identity)
        Path(name).write_text("\n".join(self.buffers[name]) + "\n", encoding="utf-8")
        for callback in self._save_callbacks:
            callback(name)

    @property
    def cursor(self) -> int | None:
        if self.current is None:
            return None
        return self.cursors.get(self.current)
