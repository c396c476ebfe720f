"""Records produced by a scan and handed to pickers."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Self

from yaml_jumper.path_stack import join_path
from yaml_jumper.types import DotSeparatedPath


@dataclass(frozen=True, slots=True)
class FileMeta:
    file_path: str
    file_name: str
    relative_path: str

    @classmethod
    def from_path(cls, file_path: Path, root: Path) -> Self:
        absolute = file_path.resolve()
        try:
            relative = absolute.relative_to(root.resolve())
        except ValueError:
            relative = absolute
        return cls(file_path=str(absolute), file_name=absolute.name, relative_path=str(relative))


@dataclass(frozen=True, slots=True, kw_only=True)
class PathEntry:
    line: int
    key: str
    text: str
    keys: tuple[str, ...]
    is_array: bool = False
    array_index: int | None = None
    # Only filled by the structured parser: a scalar, "Object" or "Array Item n"
    value: str | None = None
    file: FileMeta | None = None

    @property
    def path(self) -> DotSeparatedPath:
        return join_path(self.keys)

    def with_file(self, meta: FileMeta) -> Self:
        return replace(self, file=meta)


@dataclass(frozen=True, slots=True, kw_only=True)
class ValueEntry:
    line: int
    key: str
    keys: tuple[str, ...]
    value: str
    text: str
    file: FileMeta | None = None

    @property
    def path(self) -> DotSeparatedPath:
        return join_path(self.keys)

    def with_file(self, meta: FileMeta) -> Self:
        return replace(self, file=meta)
