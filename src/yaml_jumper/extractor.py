from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from yaml_jumper.line_classifier import MappingLine, SequenceLine, classify_line, is_inline_value, line_key
from yaml_jumper.models import PathEntry, ValueEntry
from yaml_jumper.path_stack import ArrayIndexCounter, PathStack


@dataclass(frozen=True, slots=True)
class _ScanStep:
    line_num: int
    info: MappingLine | SequenceLine
    array_index: int | None


def _walk(lines: Sequence[str], stack: PathStack) -> Iterator[_ScanStep]:
    counter = ArrayIndexCounter()

    for line_num, line in enumerate(lines, 1):
        info = classify_line(line)

        if isinstance(info, SequenceLine):
            stack.advance_item(info.indent)
            index = counter.next_index(stack.path)
            stack.push(str(index), info.indent, is_item=True)
            if info.key is not None:
                stack.push(info.key, info.key_indent)
            yield _ScanStep(line_num=line_num, info=info, array_index=index)
            continue

        if isinstance(info, MappingLine):
            stack.advance(info.indent)
            stack.push(info.key, info.indent)
            yield _ScanStep(line_num=line_num, info=info, array_index=None)


def get_paths(lines: Sequence[str]) -> list[PathEntry]:
    paths: list[PathEntry] = []
    stack = PathStack()

    for step in _walk(lines, stack):
        key = step.info.key
        if key is None:
            key = f"[{step.array_index}]"

        paths.append(
            PathEntry(
                line=step.line_num,
                key=key,
                text=lines[step.line_num - 1].strip(),
                keys=stack.keys,
                is_array=step.array_index is not None,
                array_index=step.array_index,
            ),
        )

    return paths


def get_values(lines: Sequence[str]) -> list[ValueEntry]:
    values: list[ValueEntry] = []
    seen: set[tuple[str, ...]] = set()
    stack = PathStack()

    for step in _walk(lines, stack):
        key = step.info.key
        value = step.info.value
        if key is None or not is_inline_value(value):
            continue

        keys = stack.keys
        if keys not in seen:
            seen.add(keys)
            values.append(
                ValueEntry(
                    line=step.line_num,
                    key=key,
                    keys=keys,
                    value=value,
                    text=lines[step.line_num - 1].strip(),
                ),
            )

        # a leaf cannot have children
        stack.pop()

    return values


def find_keys_with_prefix(
    prefix: str,
    lines: Sequence[str],
    *,
    limit: int | None = None,
) -> list[PathEntry]:
    needle = prefix.lower()
    matches: list[PathEntry] = []

    for line_num, line in enumerate(lines, 1):
        if limit is not None and len(matches) >= limit:
            break

        key = line_key(classify_line(line))
        if key is None or not key.lower().startswith(needle):
            continue

        matches.append(PathEntry(line=line_num, key=key, text=line.strip(), keys=(key,)))

    return matches


def find_yaml_path(
    keys: Sequence[str],
    lines: Sequence[str],
    *,
    limit: int | None = None,
) -> list[PathEntry]:
    target = tuple(keys)
    if not target:
        return []

    matches: list[PathEntry] = []
    stack = PathStack()

    for step in _walk(lines, stack):
        if limit is not None and len(matches) >= limit:
            break
        if not stack.starts_with(target):
            continue

        # nested hits still report the queried path
        matches.append(
            PathEntry(
                line=step.line_num,
                key=target[-1],
                text=lines[step.line_num - 1].strip(),
                keys=target,
            ),
        )

    return matches
