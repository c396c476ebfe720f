import logging
from collections import defaultdict, deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, cast

import yaml

from yaml_jumper.cache import CacheStore
from yaml_jumper.line_classifier import classify_line, line_key
from yaml_jumper.models import PathEntry
from yaml_jumper.path_stack import join_path
from yaml_jumper.types import DotSeparatedPath, Identity

logger = logging.getLogger("yaml_jumper")

@dataclass(frozen=True, slots=True)
class TreePath:
    keys: tuple[str, ...]
    value: str
    is_array: bool = False
    array_index: int | None = None

    @property
    def path(self) -> DotSeparatedPath:
        return join_path(self.keys)


class StructuredStrategy(Protocol):
    def try_extract(self, lines: Sequence[str], key: Identity | None) -> list[PathEntry] | None: ...


def try_parse(content: str) -> yaml.Node | None:
    # The node graph keeps keys and scalars as written, "on" stays "on"
    try:
        return yaml.compose(content, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        logger.debug("[structured] parse failed, falling back to line scan: %s", exc)
        return None


def _scalar_text(node: yaml.ScalarNode) -> str:
    if node.value == "" and node.tag == "tag:yaml.org,2002:null":
        return "null"
    return str(node.value)


def _walk_tree(
    node: yaml.Node,
    prefix: tuple[str, ...],
    result: list[TreePath],
    item_index: int | None = None,
) -> None:
    if isinstance(node, yaml.SequenceNode):
        for index, item in enumerate(node.value, 1):
            keys = (*prefix, str(index))
            if isinstance(item, (yaml.MappingNode, yaml.SequenceNode)):
                result.append(TreePath(keys=keys, value=f"Array Item {index}", is_array=True, array_index=index))
                _walk_tree(item, keys, result, item_index=index)
            else:
                result.append(TreePath(keys=keys, value=_scalar_text(item), is_array=True, array_index=index))
        return

    if isinstance(node, yaml.MappingNode):
        for position, (key_node, value_node) in enumerate(node.value):
            if not isinstance(key_node, yaml.ScalarNode):
                continue
            keys = (*prefix, str(key_node.value))
            # the first key of a sequence element sits on the "- " line
            array_index = item_index if position == 0 else None
            is_array = array_index is not None
            if isinstance(value_node, (yaml.MappingNode, yaml.SequenceNode)):
                result.append(TreePath(keys=keys, value="Object", is_array=is_array, array_index=array_index))
                _walk_tree(value_node, keys, result)
            else:
                result.append(
                    TreePath(keys=keys, value=_scalar_text(value_node), is_array=is_array, array_index=array_index),
                )


def extract_tree_paths(tree: yaml.Node | None) -> list[TreePath]:
    result: list[TreePath] = []
    if tree is not None:
        _walk_tree(tree, (), result)
    return result


def associate_lines(tree_paths: Sequence[TreePath], lines: Sequence[str]) -> list[PathEntry]:
    by_last_key: defaultdict[str, deque[TreePath]] = defaultdict(deque)
    for tree_path in tree_paths:
        by_last_key[tree_path.keys[-1]].append(tree_path)

    entries: list[PathEntry] = []
    for line_num, line in enumerate(lines, 1):
        key = line_key(classify_line(line))
        if key is None:
            continue

        # first structural match wins, and each tree path is used once
        candidates = by_last_key.get(key)
        if not candidates:
            continue
        tree_path = candidates.popleft()

        entries.append(
            PathEntry(
                line=line_num,
                key=key,
                text=line.strip(),
                keys=tree_path.keys,
                is_array=tree_path.is_array,
                array_index=tree_path.array_index,
                value=tree_path.value,
            ),
        )

    return entries


class PyYamlStrategy:
    def __init__(self, cache: CacheStore) -> None:
        self._cache = cache

    def parse(self, lines: Sequence[str], key: Identity | None) -> yaml.Node | None:
        cached = self._cache.get("yaml_docs", key)
        if cached is not None:
            return cast("yaml.Node", cached)

        tree = try_parse("\n".join(lines))
        if tree is not None:
            self._cache.set("yaml_docs", key, tree)
        return tree

    def try_extract(self, lines: Sequence[str], key: Identity | None) -> list[PathEntry] | None:
        tree = self.parse(lines, key)
        if tree is None:
            return None

        entries = associate_lines(extract_tree_paths(tree), lines)
        if not entries:
            logger.debug("[structured] no lines associated for key=%s, falling back to line scan", key)
            return None

        return entries
