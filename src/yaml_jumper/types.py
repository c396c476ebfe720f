from collections.abc import Callable
from typing import Annotated, Literal

type JSONValue = dict[str, JSONValue] | list[JSONValue] | str | int | float | bool | None

# Examples: "metadata", "metadata.name", "spec.containers.1.image"
type DotSeparatedPath = Annotated[str, "Dot-separated chain of YAML keys and 1-based sequence indices"]

# A file path, a buffer name or the CURRENT_BUFFER sentinel
type Identity = str

type StoreName = Literal["paths", "values", "lines", "yaml_docs"]

type PickerType = Literal["table", "unique_path"]

# (prompt text, default value) -> new value, or None when cancelled
type PromptFn = Callable[[str, str], str | None]
