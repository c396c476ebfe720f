import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from yaml_jumper.types import PickerType

logger = logging.getLogger("yaml_jumper")

SELECT_ACTION = "select"


@dataclass(frozen=True, slots=True, kw_only=True)
class PickerEntry:
    value: object
    display: str
    ordinal: str
    line: int = 0
    path: str = ""
    text: str = ""
    value_text: str | None = None
    filename: str | None = None


@dataclass(frozen=True, slots=True)
class Selection:
    index: int
    action: str = SELECT_ACTION


type EntryAction = Callable[[PickerEntry], None]
# (prompt title, entries, extra action names) -> selection, or None when dismissed
type ChooseFn = Callable[[str, Sequence[PickerEntry], Sequence[str]], Selection | None]


@dataclass(frozen=True, slots=True, kw_only=True)
class PickerRequest:
    prompt_title: str
    results: Sequence[Any]
    entry_maker: Callable[[Any], PickerEntry]
    on_select: EntryAction
    # Extra key bindings, e.g. {"edit": ...}
    on_attach: Mapping[str, EntryAction] = field(default_factory=dict)


class Picker(Protocol):
    def find(self, request: PickerRequest) -> PickerEntry | None: ...


class _ChoosePicker:
    def __init__(self, choose: ChooseFn) -> None:
        self._choose = choose

    def _make_entries(self, request: PickerRequest) -> list[PickerEntry]:
        return [request.entry_maker(result) for result in request.results]

    def find(self, request: PickerRequest) -> PickerEntry | None:
        entries = self._make_entries(request)
        logger.debug("[%s] %s: %d entries", type(self).__name__, request.prompt_title, len(entries))

        selection = self._choose(request.prompt_title, entries, tuple(request.on_attach))
        if selection is None:
            return None

        entry = entries[selection.index]
        if selection.action == SELECT_ACTION:
            request.on_select(entry)
        else:
            request.on_attach[selection.action](entry)
        return entry


class TablePicker(_ChoosePicker):
    pass


class UniquePathPicker(_ChoosePicker):
    """Shows each path once, aligned with its inline value."""

    def _make_entries(self, request: PickerRequest) -> list[PickerEntry]:
        seen: set[str] = set()
        entries: list[PickerEntry] = []
        for result in request.results:
            entry = request.entry_maker(result)
            if entry.path in seen:
                continue
            seen.add(entry.path)
            entries.append(replace(entry, display=f"{entry.path:<40} {entry.value_text or ''}"))
        return entries


def resolve_picker(picker_type: PickerType, choose: ChooseFn) -> Picker:
    match picker_type:
        case "table":
            return TablePicker(choose)
        case "unique_path":
            return UniquePathPicker(choose)
        case _:
            msg = f"Unknown picker type: {picker_type!r}. Expected 'table' or 'unique_path'"
            raise ValueError(msg)
