"""Pytest configuration and shared fixtures."""

import textwrap
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from yaml_jumper.cache import CacheStore
from yaml_jumper.host import BufferHost
from yaml_jumper.picker import PickerEntry, Selection

DEPLOYMENT_YAML = textwrap.dedent(
    """\
    apiVersion: apps/v1
    kind: Deployment
    metadata:
      name: nginx-deployment
      labels:
        app: nginx
    spec:
      replicas: 3
      containers:
      - name: nginx
        image: nginx:1.14.2
      - name: sidecar
        image: busybox
    """,
)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedChooser:
    """Stands in for the interactive picker UI.

    Selects the first entry whose path equals ``path`` (or the entry at
    ``index``) and records every call.
    """

    def __init__(self, *, path: str | None = None, index: int | None = None, action: str = "select") -> None:
        self.path = path
        self.index = index
        self.action = action
        self.calls: list[tuple[str, list[PickerEntry], list[str]]] = []

    def __call__(self, title: str, entries: Sequence[PickerEntry], actions: Sequence[str]) -> Selection | None:
        self.calls.append((title, list(entries), list(actions)))
        if self.index is not None:
            return Selection(self.index, self.action)
        for index, entry in enumerate(entries):
            if entry.path == self.path:
                return Selection(index, self.action)
        return None

    @property
    def last_entries(self) -> list[PickerEntry]:
        return self.calls[-1][1]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheStore:
    return CacheStore(ttl=30.0, clock=clock)


@pytest.fixture
def lines_of() -> Callable[[str], list[str]]:
    def _lines(content: str) -> list[str]:
        return textwrap.dedent(content).splitlines()

    return _lines


@pytest.fixture
def deployment_file(tmp_path: Path) -> Path:
    path = tmp_path / "deployment.yaml"
    path.write_text(DEPLOYMENT_YAML)
    return path


@pytest.fixture
def host(deployment_file: Path) -> BufferHost:
    buffer_host = BufferHost()
    buffer_host.open_buffer(str(deployment_file))
    return buffer_host


@pytest.fixture
def make_chooser() -> type[ScriptedChooser]:
    return ScriptedChooser


@pytest.fixture
def deployment_lines() -> list[str]:
    return DEPLOYMENT_YAML.splitlines()
