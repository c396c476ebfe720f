from collections.abc import Sequence
from dataclasses import dataclass

from yaml_jumper.types import DotSeparatedPath


def join_path(keys: Sequence[str]) -> DotSeparatedPath:
    return ".".join(keys)


@dataclass(frozen=True, slots=True)
class PathStackFrame:
    key: str
    indent: int
    # Positional slot of a sequence item, key is the 1-based index
    is_item: bool = False


class PathStack:
    """Chain of ancestor keys active at the current scan line, outermost first.

    Nesting is reconstructed purely from indentation: a line pops every frame
    whose recorded indent is >= its own before anything is pushed, so the
    baseline indent is always the one recorded by the remaining top frame.
    """

    def __init__(self) -> None:
        self._frames: list[PathStackFrame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return f"PathStack({self.path!r})"

    @property
    def frames(self) -> tuple[PathStackFrame, ...]:
        return tuple(self._frames)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(frame.key for frame in self._frames)

    @property
    def path(self) -> DotSeparatedPath:
        return join_path(self.keys)

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def indent(self) -> int:
        if not self._frames:
            return -1
        return self._frames[-1].indent

    def advance(self, indent: int) -> int:
        while self._frames and indent <= self._frames[-1].indent:
            self._frames.pop()
        return self.indent

    def advance_item(self, indent: int) -> int:
        # "key:\n- item" keeps the key frame at the same indent as the dash
        while self._frames:
            top = self._frames[-1]
            if top.indent < indent or (top.indent == indent and not top.is_item):
                break
            self._frames.pop()
        return self.indent

    def push(self, key: str, indent: int, *, is_item: bool = False) -> None:
        self._frames.append(PathStackFrame(key=key, indent=indent, is_item=is_item))

    def pop(self) -> PathStackFrame:
        return self._frames.pop()

    def starts_with(self, keys: Sequence[str]) -> bool:
        if len(self._frames) < len(keys):
            return False
        return all(frame.key == key for frame, key in zip(self._frames, keys, strict=False))


class ArrayIndexCounter:
    """Running 1-based sequence index per parent path, reset with each scan."""

    def __init__(self) -> None:
        self._counters: dict[DotSeparatedPath, int] = {}

    def next_index(self, parent_path: DotSeparatedPath) -> int:
        index = self._counters.get(parent_path, 0) + 1
        self._counters[parent_path] = index
        return index
