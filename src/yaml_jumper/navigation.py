import logging
import time
from pathlib import Path

from yaml_jumper.editor import ValueEditor
from yaml_jumper.history import HistoryEntry, HistoryKind, HistoryLedger
from yaml_jumper.host import CURRENT_BUFFER, TextHost
from yaml_jumper.indexer import YamlIndexer
from yaml_jumper.line_classifier import extract_value_from_line, parse_path
from yaml_jumper.models import FileMeta, PathEntry, ValueEntry
from yaml_jumper.picker import EntryAction, Picker, PickerEntry, PickerRequest
from yaml_jumper.project import ProjectScanner
from yaml_jumper.types import Identity

logger = logging.getLogger("yaml_jumper")


def _file_fields(meta: FileMeta | None) -> tuple[str, str, str | None]:
    if meta is None:
        return "", "", None
    return meta.relative_path, meta.file_name, meta.file_path


class Navigator:
    def __init__(  # noqa: PLR0913
        self,
        *,
        host: TextHost,
        indexer: YamlIndexer,
        history: HistoryLedger,
        editor: ValueEditor,
        scanner: ProjectScanner,
        picker: Picker,
    ) -> None:
        self._host = host
        self._indexer = indexer
        self._history = history
        self._editor = editor
        self._scanner = scanner
        self._picker = picker

    def _buffer_key(self) -> Identity:
        return self._host.get_buffer_name() or CURRENT_BUFFER

    def _current_lines(self) -> list[str]:
        return self._host.read_lines(CURRENT_BUFFER)

    def _edit_actions(self) -> dict[str, EntryAction]:
        return {"edit": self._edit_action}

    def _edit_action(self, entry: PickerEntry) -> None:
        self.edit_selected(entry)

    def _jump(self, line_num: int, message: str) -> None:
        self._host.move_cursor(CURRENT_BUFFER, line_num)
        self._host.notify(message, logging.INFO)

    def _open_and_move(self, entry: PickerEntry) -> None:
        if entry.filename and entry.filename != self._host.get_buffer_name():
            logger.debug("[Navigator] Opening %s", entry.filename)
            self._host.open_buffer(entry.filename)
        self._host.move_cursor(entry.filename or CURRENT_BUFFER, entry.line)

    def edit_selected(self, entry: PickerEntry) -> bool:
        self._open_and_move(entry)
        return self._editor.edit_value(entry.filename, entry.line, self._host.prompt)

    def jump_to_path(self) -> PickerEntry | None:
        lines = self._current_lines()
        filename = self._host.get_buffer_name() or None
        paths = self._indexer.get_paths(lines, self._buffer_key())

        def make_entry(entry: PathEntry) -> PickerEntry:
            return PickerEntry(
                value=entry,
                display=entry.path,
                ordinal=entry.path,
                line=entry.line,
                path=entry.path,
                text=entry.text,
                value_text=extract_value_from_line(entry.text) or "",
                filename=filename,
            )

        def on_select(selection: PickerEntry) -> None:
            self._host.move_cursor(CURRENT_BUFFER, selection.line)
            self._history.add(HistoryKind.PATH, selection.path)

        return self._picker.find(
            PickerRequest(
                prompt_title="YAML Path",
                results=paths,
                entry_maker=make_entry,
                on_select=on_select,
                on_attach=self._edit_actions(),
            ),
        )

    def jump_to_key(self) -> PickerEntry | None:
        matches = self._indexer.find_keys_with_prefix("", self._current_lines())

        def make_entry(entry: PathEntry) -> PickerEntry:
            return PickerEntry(
                value=entry,
                display=entry.key,
                ordinal=entry.key,
                line=entry.line,
                path=entry.path,
                text=entry.text,
            )

        def on_select(selection: PickerEntry) -> None:
            self._host.move_cursor(CURRENT_BUFFER, selection.line)

        return self._picker.find(
            PickerRequest(
                prompt_title="YAML Key",
                results=matches,
                entry_maker=make_entry,
                on_select=on_select,
            ),
        )

    def jump_to_value(self) -> PickerEntry | None:
        lines = self._current_lines()
        filename = self._host.get_buffer_name() or None
        values = self._indexer.get_values(lines, self._buffer_key())

        def make_entry(entry: ValueEntry) -> PickerEntry:
            return PickerEntry(
                value=entry,
                display=f"{entry.path}: {entry.value}",
                ordinal=f"{entry.path} {entry.value}",
                line=entry.line,
                path=entry.path,
                text=entry.text,
                value_text=entry.value,
                filename=filename,
            )

        def on_select(selection: PickerEntry) -> None:
            self._host.move_cursor(CURRENT_BUFFER, selection.line)
            self._history.add(HistoryKind.VALUE, f"{selection.path}: {selection.value_text or ''}")

        return self._picker.find(
            PickerRequest(
                prompt_title="YAML Value Search",
                results=values,
                entry_maker=make_entry,
                on_select=on_select,
                on_attach=self._edit_actions(),
            ),
        )

    def jump_to_specific_path(self, path_string: str) -> bool:
        matches = self._indexer.find_yaml_path(parse_path(path_string), self._current_lines(), limit=1)
        if matches:
            self._jump(matches[0].line, f"Jumped to: {path_string}")
            return True

        self._host.notify(f"Path not found: {path_string}", logging.WARNING)
        return False

    def jump_to_specific_value(self, value_string: str) -> bool:
        path, sep, value = value_string.partition(": ")
        if not sep or not path or not value:
            self._host.notify(f"Invalid value format: {value_string}", logging.ERROR)
            return False

        lines = self._current_lines()
        matches = self._indexer.find_yaml_path(parse_path(path), lines, limit=1)
        if matches:
            self._jump(matches[0].line, f"Jumped to: {value_string}")
            return True

        for entry in self._indexer.get_values(lines, self._buffer_key()):
            if entry.path == path and entry.value == value:
                self._jump(entry.line, f"Jumped to: {value_string}")
                return True

        self._host.notify(f"Value not found: {value_string}", logging.WARNING)
        return False

    def jump_to_history(self) -> PickerEntry | None:
        if self._history.is_empty():
            self._host.notify("No YAML jump history available", logging.INFO)
            return None

        def make_entry(entry: HistoryEntry) -> PickerEntry:
            stamp = time.strftime("%H:%M:%S", time.localtime(entry.timestamp))
            label = "Path" if entry.kind is HistoryKind.PATH else "Value"
            display = f"[{stamp}] {label}: {entry.value}"
            return PickerEntry(value=entry, display=display, ordinal=display)

        def on_select(selection: PickerEntry) -> None:
            entry = selection.value
            if not isinstance(entry, HistoryEntry):
                return
            if entry.kind is HistoryKind.PATH:
                self.jump_to_specific_path(entry.value)
            else:
                self.jump_to_specific_value(entry.value)

        return self._picker.find(
            PickerRequest(
                prompt_title="YAML Jump History",
                results=list(reversed(self._history.entries())),
                entry_maker=make_entry,
                on_select=on_select,
            ),
        )

    def search_paths_in_project(self, root: Path | None = None) -> PickerEntry | None:
        root = root or Path.cwd()
        files = self._scanner.find_files(root)
        if not files:
            self._host.notify("No YAML files found in the project", logging.WARNING)
            return None

        paths = self._scanner.collect_paths(files, root)

        def make_entry(entry: PathEntry) -> PickerEntry:
            relative_path, file_name, file_path = _file_fields(entry.file)
            return PickerEntry(
                value=entry,
                display=f"{relative_path}:{entry.path}",
                ordinal=f"{file_name} {entry.path}",
                line=entry.line,
                path=entry.path,
                text=entry.text,
                value_text=extract_value_from_line(entry.text) or "",
                filename=file_path,
            )

        return self._picker.find(
            PickerRequest(
                prompt_title="YAML Paths in Project",
                results=paths,
                entry_maker=make_entry,
                on_select=self._open_and_move,
            ),
        )

    def search_values_in_project(self, root: Path | None = None) -> PickerEntry | None:
        root = root or Path.cwd()
        files = self._scanner.find_files(root)
        if not files:
            self._host.notify("No YAML files found in the project", logging.WARNING)
            return None

        values = self._scanner.collect_values(files, root)

        def make_entry(entry: ValueEntry) -> PickerEntry:
            relative_path, file_name, file_path = _file_fields(entry.file)
            return PickerEntry(
                value=entry,
                display=f"{relative_path}: {entry.path} = {entry.value}",
                ordinal=f"{file_name} {entry.path} {entry.value}",
                line=entry.line,
                path=entry.path,
                text=entry.text,
                value_text=entry.value,
                filename=file_path,
            )

        return self._picker.find(
            PickerRequest(
                prompt_title="YAML Values in Project",
                results=values,
                entry_maker=make_entry,
                on_select=self._open_and_move,
                on_attach=self._edit_actions(),
            ),
        )
