"""load_config + search_values_in_project - pick a value across every YAML file."""

from collections.abc import Sequence
from pathlib import Path

from yaml_jumper import BufferHost, Selection, load_config, setup
from yaml_jumper.picker import PickerEntry

SOURCES_DIR = Path(__file__).parent / "sources"


def choose(title: str, entries: Sequence[PickerEntry], _actions: Sequence[str]) -> Selection | None:
    print(title)
    for entry in entries:
        print(f"  {entry.display}")
    for index, entry in enumerate(entries):
        if entry.path == "database.url":
            return Selection(index)
    return None


config = load_config(str(SOURCES_DIR / "jumper.yaml"), prefix="yaml_jumper", env_prefix=None)
print(f"cache_ttl: {config.cache_ttl}, depth_limit: {config.depth_limit}")

host = BufferHost()
jumper = setup(config, host=host, choose=choose)
jumper.search_values_in_project(SOURCES_DIR)

print(f"opened: {Path(host.get_buffer_name()).name} at line {host.cursor}")
