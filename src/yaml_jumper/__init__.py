from yaml_jumper.config import JumperConfig, load_config
from yaml_jumper.host import CURRENT_BUFFER, BufferHost
from yaml_jumper.indexer import YamlIndexer
from yaml_jumper.main import YamlJumper, setup
from yaml_jumper.picker import Selection, TablePicker, UniquePathPicker

__all__ = [
    "CURRENT_BUFFER",
    "BufferHost",
    "JumperConfig",
    "Selection",
    "TablePicker",
    "UniquePathPicker",
    "YamlIndexer",
    "YamlJumper",
    "load_config",
    "setup",
]
