from yaml_jumper.path_stack import ArrayIndexCounter, PathStack, join_path


class TestPathStack:
    def test_empty_stack(self) -> None:
        stack = PathStack()

        assert stack.path == ""
        assert stack.depth == 0
        assert stack.indent == -1

    def test_advance_pops_siblings_and_children(self) -> None:
        stack = PathStack()
        stack.push("spec", 0)
        stack.push("template", 2)
        stack.push("metadata", 4)

        assert stack.advance(2) == 0
        assert stack.keys == ("spec",)

    def test_baseline_comes_from_remaining_frame(self) -> None:
        stack = PathStack()
        stack.push("a", 0)
        stack.push("b", 4)
        stack.push("c", 7)

        # irregular indentation still unwinds to the nearest shallower frame
        assert stack.advance(5) == 4
        assert stack.path == "a.b"

    def test_advance_item_keeps_key_at_same_indent(self) -> None:
        stack = PathStack()
        stack.push("containers", 2)

        assert stack.advance_item(2) == 2
        assert stack.keys == ("containers",)

    def test_advance_item_pops_previous_item(self) -> None:
        stack = PathStack()
        stack.push("containers", 2)
        stack.push("1", 2, is_item=True)
        stack.push("name", 4)

        assert stack.advance_item(2) == 2
        assert stack.keys == ("containers",)

    def test_pop_returns_top_frame(self) -> None:
        stack = PathStack()
        stack.push("a", 0)

        frame = stack.pop()

        assert frame.key == "a"
        assert len(stack) == 0

    def test_starts_with(self) -> None:
        stack = PathStack()
        stack.push("spec", 0)
        stack.push("replicas", 2)

        assert stack.starts_with(["spec"])
        assert stack.starts_with(["spec", "replicas"])
        assert not stack.starts_with(["spec", "replicas", "x"])
        assert not stack.starts_with(["metadata"])


class TestArrayIndexCounter:
    def test_counts_per_parent(self) -> None:
        counter = ArrayIndexCounter()

        assert counter.next_index("a") == 1
        assert counter.next_index("a") == 2
        assert counter.next_index("b") == 1
        assert counter.next_index("a") == 3


def test_join_path() -> None:
    assert join_path(("spec", "containers", "1")) == "spec.containers.1"
    assert join_path(()) == ""
