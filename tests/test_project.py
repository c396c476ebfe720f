import logging
from pathlib import Path

import pytest

from yaml_jumper.cache import CacheStore
from yaml_jumper.indexer import YamlIndexer
from yaml_jumper.project import ProjectScanner, find_yaml_files, is_yaml_file, read_file_lines


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "a.yaml").write_text("name: a\n")
    (tmp_path / "b.yml").write_text("name: b\n")
    (tmp_path / "c.txt").write_text("name: c\n")
    (tmp_path / ".hidden.yaml").write_text("name: hidden\n")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "x.yaml").write_text("name: x\n")
    (tmp_path / "sub" / "deep").mkdir(parents=True)
    (tmp_path / "sub" / "d.yaml").write_text("server:\n  port: 8080\n")
    (tmp_path / "sub" / "deep" / "e.yaml").write_text("name: e\n")
    return tmp_path


def _relative(files: list[Path], root: Path) -> set[str]:
    return {str(path.relative_to(root.resolve())) for path in files}


class TestFindYamlFiles:
    @pytest.mark.parametrize(
        ("depth_limit", "expected"),
        [
            pytest.param(0, {"a.yaml", "b.yml"}, id="root-only"),
            pytest.param(1, {"a.yaml", "b.yml", "sub/d.yaml"}, id="one-level"),
            pytest.param(10, {"a.yaml", "b.yml", "sub/d.yaml", "sub/deep/e.yaml"}, id="unbounded"),
        ],
    )
    def test_depth_limit(self, project: Path, depth_limit: int, expected: set[str]) -> None:
        assert _relative(find_yaml_files(project, depth_limit), project) == expected

    def test_paths_are_absolute(self, project: Path) -> None:
        assert all(path.is_absolute() for path in find_yaml_files(project, 10))

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            pytest.param("a.yaml", True, id="yaml"),
            pytest.param("a.YML", True, id="upper-yml"),
            pytest.param("a.json", False, id="json"),
        ],
    )
    def test_is_yaml_file(self, name: str, expected: bool) -> None:  # noqa: FBT001
        assert is_yaml_file(Path(name)) is expected


class TestReadFileLines:
    def test_reads_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "a.yaml"
        path.write_text("a: 1\nb: 2\n")

        assert read_file_lines(path, 1024) == ["a: 1", "b: 2"]

    def test_oversized_file_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "big.yaml"
        path.write_text("a: 1\n" * 100)

        with caplog.at_level(logging.WARNING, logger="yaml_jumper"):
            assert read_file_lines(path, 10) == []

        assert "File too large to process" in caplog.text

    def test_missing_file_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="yaml_jumper"):
            assert read_file_lines(tmp_path / "missing.yaml", 1024) == []

        assert "Error opening file" in caplog.text


class TestProjectScanner:
    def test_scan_paths_attaches_file_meta(self, project: Path, cache: CacheStore) -> None:
        scanner = ProjectScanner(YamlIndexer(cache), cache)

        paths = scanner.scan_paths(project)

        port = next(entry for entry in paths if entry.path == "server.port")
        assert port.line == 2
        assert port.file is not None
        assert port.file.file_name == "d.yaml"
        assert port.file.relative_path == "sub/d.yaml"
        assert port.file.file_path == str((project / "sub" / "d.yaml").resolve())

    def test_scan_values_aggregates_files(self, project: Path, cache: CacheStore) -> None:
        scanner = ProjectScanner(YamlIndexer(cache), cache)

        values = scanner.scan_values(project)

        assert sorted((entry.file.relative_path, entry.path, entry.value) for entry in values if entry.file) == [
            ("a.yaml", "name", "a"),
            ("b.yml", "name", "b"),
            ("sub/d.yaml", "server.port", "8080"),
            ("sub/deep/e.yaml", "name", "e"),
        ]

    def test_oversized_files_do_not_abort_scan(self, project: Path, cache: CacheStore) -> None:
        (project / "big.yaml").write_text("big: 1\n" * 100)
        scanner = ProjectScanner(YamlIndexer(cache), cache, max_file_size=100)

        paths = scanner.scan_paths(project)

        assert "big" not in {entry.path for entry in paths}
        assert "server.port" in {entry.path for entry in paths}

    def test_read_lines_uses_cache(self, project: Path, cache: CacheStore) -> None:
        scanner = ProjectScanner(YamlIndexer(cache), cache)
        path = project / "a.yaml"

        scanner.read_lines(path)
        path.write_text("name: changed\n")

        assert scanner.read_lines(path) == ["name: a"]
        assert cache.get("lines", str(path.resolve())) == ["name: a"]
