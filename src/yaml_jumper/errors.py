from collections.abc import Sequence
from typing import Self


def _truncate_line(line: str, max_length: int = 80) -> str:
    if len(line) > max_length:
        return line[: max_length - 3] + "..."
    return line


class YamlJumperError(Exception):
    """Base yaml_jumper error."""


class LineParseError(YamlJumperError):
    def __init__(
        self,
        *,
        line: str,
        message: str,
        line_num: int | None = None,
    ) -> None:
        self.line = line
        self.message = message
        self.line_num = line_num
        super().__init__(self._format())

    def _format(self) -> str:
        location = f"line {self.line_num}" if self.line_num is not None else "<line>"
        return f"  [{location}]  {self.message}\n       {_truncate_line(self.line.strip())}"


class ConfigFieldError(YamlJumperError):
    def __init__(
        self,
        *,
        field_path: list[str],
        message: str,
        input_value: str | float | bool | None = None,
    ) -> None:
        self.field_path = field_path
        self.message = message
        self.input_value = input_value
        super().__init__(self._format())

    def _format(self) -> str:
        path_str = ".".join(self.field_path)
        if not path_str:
            path_str = "<root>"
        return f"  [{path_str}]  {self.message}"


class ConfigError(ExceptionGroup[ConfigFieldError]):
    source_name: str

    def __new__(
        cls,
        source_name: str,
        errors: Sequence[ConfigFieldError],
    ) -> Self:
        obj = super().__new__(
            cls,
            f"{source_name} configuration errors ({len(errors)})",
            errors,
        )
        obj.source_name = source_name
        return obj

    def __init__(
        self,
        source_name: str,
        errors: Sequence[ConfigFieldError],
    ) -> None:
        pass

    def derive(self, excs: Sequence[ConfigFieldError], /) -> Self:  # type: ignore[override]
        return self.__class__(self.source_name, list(excs))

    def __str__(self) -> str:
        lines: list[str] = []
        lines.append(f"{self.source_name} configuration errors ({len(self.exceptions)})")
        lines.append("")

        for exc in self.exceptions:
            lines.append(str(exc))
            lines.append("")

        return "\n".join(lines)
