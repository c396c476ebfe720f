from dataclasses import dataclass

from yaml_jumper.errors import LineParseError


@dataclass(frozen=True, slots=True)
class BlankOrComment:
    pass


BLANK = BlankOrComment()


@dataclass(frozen=True, slots=True)
class MappingLine:
    indent: int
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class SequenceLine:
    indent: int
    key: str | None
    value: str | None
    # Column where the inline key starts, e.g. 4 for "  - name: x"
    key_indent: int


type LineInfo = BlankOrComment | MappingLine | SequenceLine

BLOCK_SCALAR_INDICATORS = frozenset(("|", ">", "|-", ">-", "|+", ">+"))


def measure_indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def is_blank_or_comment(line: str) -> bool:
    stripped = line.lstrip()
    return not stripped or stripped.startswith("#")


def _clean_key(key_part: str) -> str:
    return key_part.strip().strip("\"'")


def _is_sequence_marker(stripped: str) -> bool:
    # "---" and "-1: x" are not sequence items
    return stripped == "-" or stripped[:2] in {"- ", "-\t"}


def _classify_sequence(stripped: str, indent: int) -> SequenceLine:
    rest = stripped[1:]
    item = rest.lstrip()
    key_indent = indent + 1 + (len(rest) - len(item))

    key_part, sep, value_part = item.partition(":")
    if sep and key_part.strip():
        return SequenceLine(
            indent=indent,
            key=_clean_key(key_part),
            value=value_part.strip(),
            key_indent=key_indent,
        )

    return SequenceLine(indent=indent, key=None, value=item.strip() or None, key_indent=key_indent)


def classify_line(line: str) -> LineInfo | None:
    stripped = line.lstrip()
    if not stripped or stripped.startswith("#"):
        return BLANK

    indent = len(line) - len(stripped)

    if _is_sequence_marker(stripped):
        return _classify_sequence(stripped, indent)

    key_part, sep, value_part = stripped.partition(":")
    if not sep or not key_part.strip():
        return None

    return MappingLine(indent=indent, key=_clean_key(key_part), value=value_part.strip())


def is_inline_value(value: str | None) -> bool:
    # Inline value (not empty and not block scalar indicator)
    return bool(value) and value not in BLOCK_SCALAR_INDICATORS


def line_key(info: LineInfo | None) -> str | None:
    if isinstance(info, (MappingLine, SequenceLine)):
        return info.key
    return None


def split_value_line(line: str, *, line_num: int | None = None) -> tuple[str, str]:
    info = classify_line(line)
    if line_key(info) is None:
        raise LineParseError(
            line=line,
            line_num=line_num,
            message="Could not parse YAML value on this line",
        )

    colon = line.index(":")
    return line[: colon + 1], line[colon + 1 :].strip()


def extract_value_from_line(text: str | None) -> str | None:
    if text is None:
        return None

    info = classify_line(text)
    if isinstance(info, (MappingLine, SequenceLine)) and info.key is not None and is_inline_value(info.value):
        return info.value
    return None


def parse_path(path: str) -> list[str]:
    return [key for key in path.split(".") if key]
