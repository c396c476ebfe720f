import logging
from pathlib import Path

from yaml_jumper.cache import CacheStore
from yaml_jumper.config import JumperConfig
from yaml_jumper.editor import ValueEditor
from yaml_jumper.history import HistoryLedger
from yaml_jumper.host import TextHost
from yaml_jumper.indexer import YamlIndexer
from yaml_jumper.navigation import Navigator
from yaml_jumper.picker import ChooseFn, Picker, PickerEntry, resolve_picker
from yaml_jumper.project import ProjectScanner, is_yaml_file
from yaml_jumper.structured import PyYamlStrategy
from yaml_jumper.types import Identity

logger = logging.getLogger("yaml_jumper")


class YamlJumper:
    def __init__(self, config: JumperConfig, *, host: TextHost, picker: Picker) -> None:
        self.config = config
        self.host = host
        self.cache = CacheStore(ttl=config.cache_ttl, enabled=config.cache_enabled)
        self.history = HistoryLedger(max_size=config.max_history_size)

        structured = PyYamlStrategy(self.cache) if config.use_smart_parser else None
        self.indexer = YamlIndexer(
            self.cache,
            structured=structured,
            debug_performance=config.debug_performance,
        )
        self.scanner = ProjectScanner(
            self.indexer,
            self.cache,
            max_file_size=config.max_file_size,
            depth_limit=config.depth_limit,
        )
        self.editor = ValueEditor(host, self.cache)
        self.navigator = Navigator(
            host=host,
            indexer=self.indexer,
            history=self.history,
            editor=self.editor,
            scanner=self.scanner,
            picker=picker,
        )

    def on_buffer_saved(self, path: Identity) -> None:
        if is_yaml_file(Path(path)):
            logger.debug("[YamlJumper] saved, clearing cache: %s", path)
            self.cache.clear(path)

    def clear_cache(self, key: Identity | None = None) -> None:
        self.cache.clear(key)

    def jump_to_path(self) -> PickerEntry | None:
        return self.navigator.jump_to_path()

    def jump_to_key(self) -> PickerEntry | None:
        return self.navigator.jump_to_key()

    def jump_to_value(self) -> PickerEntry | None:
        return self.navigator.jump_to_value()

    def jump_to_specific_path(self, path_string: str) -> bool:
        return self.navigator.jump_to_specific_path(path_string)

    def jump_to_specific_value(self, value_string: str) -> bool:
        return self.navigator.jump_to_specific_value(value_string)

    def jump_to_history(self) -> PickerEntry | None:
        return self.navigator.jump_to_history()

    def search_paths_in_project(self, root: Path | None = None) -> PickerEntry | None:
        return self.navigator.search_paths_in_project(root)

    def search_values_in_project(self, root: Path | None = None) -> PickerEntry | None:
        return self.navigator.search_values_in_project(root)


def setup(
    config: JumperConfig | None = None,
    *,
    host: TextHost,
    picker: Picker | None = None,
    choose: ChooseFn | None = None,
) -> YamlJumper:
    config = config or JumperConfig()

    if picker is None:
        if choose is None:
            msg = "setup() requires either a picker or a choose function"
            raise ValueError(msg)
        picker = resolve_picker(config.picker_type, choose)

    jumper = YamlJumper(config, host=host, picker=picker)
    host.subscribe_save(jumper.on_buffer_saved)

    logger.debug(
        "[setup] picker=%s, cache_enabled=%s, cache_ttl=%s, smart_parser=%s",
        type(picker).__name__,
        config.cache_enabled,
        config.cache_ttl,
        config.use_smart_parser,
    )
    return jumper
