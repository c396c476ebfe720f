import os
from pathlib import Path

import pytest

from yaml_jumper.config import JumperConfig, load_config
from yaml_jumper.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("YAML_JUMPER_"):
            monkeypatch.delenv(key)


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config()

        assert config == JumperConfig()
        assert config.max_file_size == 1024 * 1024
        assert config.cache_ttl == 30.0
        assert config.picker_type == "table"

    @pytest.mark.parametrize(
        ("file_name", "content"),
        [
            pytest.param(
                "jumper.yaml",
                "plugins:\n  yaml_jumper:\n    cache_ttl: 5\n    picker_type: unique_path\n",
                id="yaml",
            ),
            pytest.param(
                "jumper.toml",
                '[plugins.yaml_jumper]\ncache_ttl = 5\npicker_type = "unique_path"\n',
                id="toml",
            ),
            pytest.param(
                "jumper.json",
                '{"plugins": {"yaml_jumper": {"cache_ttl": 5, "picker_type": "unique_path"}}}',
                id="json",
            ),
        ],
    )
    def test_from_file_with_prefix(self, tmp_path: Path, file_name: str, content: str) -> None:
        path = tmp_path / file_name
        path.write_text(content)

        config = load_config(str(path), prefix="plugins.yaml_jumper")

        assert config.cache_ttl == 5
        assert config.picker_type == "unique_path"
        assert config.depth_limit == 10

    def test_missing_prefix_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "jumper.yaml"
        path.write_text("other: 1\n")

        assert load_config(str(path), prefix="yaml_jumper") == JumperConfig()

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "jumper.yaml"
        path.write_text("cache_ttl: 5\ndepth_limit: 3\n")
        monkeypatch.setenv("YAML_JUMPER_CACHE_TTL", "12")
        monkeypatch.setenv("YAML_JUMPER_CACHE_ENABLED", "false")

        config = load_config(str(path))

        assert config.cache_ttl == 12
        assert config.cache_enabled is False
        assert config.depth_limit == 3

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("YAML_JUMPER_MAX_HISTORY_SIZE", "50")

        config = load_config(max_history_size=20)

        assert config.max_history_size == 20

    def test_env_prefix_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("YAML_JUMPER_DEPTH_LIMIT", "2")

        assert load_config(env_prefix=None).depth_limit == 10

    def test_invalid_value(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(env_prefix=None, max_file_size="huge")

        error = exc_info.value
        assert error.source_name == "JumperConfig"
        assert [exc.field_path for exc in error.exceptions] == [["max_file_size"]]
        assert str(error).startswith("JumperConfig configuration errors (1)")

    def test_invalid_picker_type(self, tmp_path: Path) -> None:
        path = tmp_path / "jumper.yaml"
        path.write_text("picker_type: fancy\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path), env_prefix=None)

        assert exc_info.value.source_name == str(path)
        assert exc_info.value.exceptions[0].field_path == ["picker_type"]

    def test_unknown_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "jumper.ini"
        path.write_text("[x]\n")

        with pytest.raises(ValueError, match="Cannot determine config format"):
            load_config(str(path))
