"""setup + BufferHost - pick a path, edit its value in place and jump by path."""

import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path

from yaml_jumper import BufferHost, Selection, setup
from yaml_jumper.picker import PickerEntry

SOURCES_DIR = Path(__file__).parent / "sources"


def choose(title: str, entries: Sequence[PickerEntry], actions: Sequence[str]) -> Selection | None:
    print(f"{title}: {len(entries)} entries, actions={list(actions)}")
    for index, entry in enumerate(entries):
        if entry.path == "spec.containers.1.image":
            return Selection(index, "edit")
    return None


with tempfile.TemporaryDirectory() as tmp:
    target = Path(tmp) / "deployment.yaml"
    shutil.copy(SOURCES_DIR / "deployment.yaml", target)

    host = BufferHost(prompt_fn=lambda _text, default: default.replace("1.25", "1.27"))
    host.open_buffer(str(target))

    jumper = setup(host=host, choose=choose)
    jumper.jump_to_path()
    host.save()
    print(target.read_text())

    jumper.jump_to_specific_path("metadata.labels.app")
    print(f"cursor: {host.cursor}")
