from yaml_jumper.history import HistoryEntry, HistoryKind, HistoryLedger


class TestHistoryLedger:
    def test_consecutive_duplicate_suppressed(self) -> None:
        history = HistoryLedger()
        history.add("path", "a")
        history.add("path", "a")

        assert len(history) == 1

    def test_same_value_different_kind_kept(self) -> None:
        history = HistoryLedger()
        history.add("path", "a")
        history.add("value", "a")

        assert [(entry.kind, entry.value) for entry in history.entries()] == [
            (HistoryKind.PATH, "a"),
            (HistoryKind.VALUE, "a"),
        ]

    def test_non_adjacent_duplicates_retained(self) -> None:
        history = HistoryLedger()
        for value in ("a", "b", "a"):
            history.add(HistoryKind.PATH, value)

        assert [entry.value for entry in history.entries()] == ["a", "b", "a"]

    def test_trims_oldest(self) -> None:
        history = HistoryLedger(max_size=2)
        for value in ("a", "b", "c"):
            history.add(HistoryKind.PATH, value)

        assert [entry.value for entry in history.entries()] == ["b", "c"]

    def test_set_max_size_trims(self) -> None:
        history = HistoryLedger()
        for value in ("a", "b", "c"):
            history.add(HistoryKind.PATH, value)

        history.set_max_size(1)

        assert [entry.value for entry in history.entries()] == ["c"]
        assert history.max_size == 1

    def test_empty_value_ignored(self) -> None:
        history = HistoryLedger()
        history.add(HistoryKind.PATH, "")
        history.add(HistoryKind.PATH, None)

        assert history.is_empty()

    def test_timestamps_from_clock(self) -> None:
        history = HistoryLedger(clock=lambda: 42.0)
        history.add(HistoryKind.VALUE, "spec.replicas: 3")

        assert history.entries() == [HistoryEntry(kind=HistoryKind.VALUE, value="spec.replicas: 3", timestamp=42.0)]

    def test_entries_is_a_copy(self) -> None:
        history = HistoryLedger()
        history.add(HistoryKind.PATH, "a")

        history.entries().clear()

        assert len(history) == 1

    def test_clear(self) -> None:
        history = HistoryLedger()
        history.add(HistoryKind.PATH, "a")

        history.clear()

        assert history.is_empty()
