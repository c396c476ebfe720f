"""YamlIndexer - list the paths and inline values of a file from its raw lines."""

from pathlib import Path

from yaml_jumper import YamlIndexer
from yaml_jumper.cache import CacheStore

SOURCES_DIR = Path(__file__).parent / "sources"

lines = (SOURCES_DIR / "deployment.yaml").read_text().splitlines()
indexer = YamlIndexer(CacheStore())

for entry in indexer.get_paths(lines):
    print(f"{entry.line:>3}  {entry.path}")

for entry in indexer.get_values(lines):
    print(f"{entry.path} = {entry.value}")
