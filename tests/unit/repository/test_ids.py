import pytest

from tracker.repository import IdCounters, format_id, parse_id


class TestFormatAndParse:
    def test_pads_to_three_digits(self) -> None:
        assert format_id("task", 7) == "task_007"

    def test_wider_numbers_are_not_truncated(self) -> None:
        assert format_id("idea", 1234) == "idea_1234"

    def test_parses_counter_shaped_ids(self) -> None:
        assert parse_id("subtask_012") == ("subtask", 12)

    @pytest.mark.parametrize("record_id", ["launch-party", "sub-001", "task_", "_001", "Task_001"])
    def test_rejects_other_ids(self, record_id: str) -> None:
        assert parse_id(record_id) is None


class TestIdCounters:
    def test_counters_start_at_one(self) -> None:
        assert IdCounters().peek("proj") == "proj_001"

    def test_peek_does_not_consume(self) -> None:
        counters = IdCounters()

        assert counters.peek("task") == counters.peek("task")

    def test_peek_skips_taken_ids(self) -> None:
        counters = IdCounters()

        assert counters.peek("task", ["task_001", "task_002"]) == "task_003"

    def test_observe_advances_past_id(self) -> None:
        counters = IdCounters()

        assert counters.observe("task_005")
        assert counters.peek("task") == "task_006"

    def test_observe_never_moves_backwards(self) -> None:
        counters = IdCounters({"task": 10})

        assert not counters.observe("task_003")
        assert counters.peek("task") == "task_010"

    def test_observe_ignores_foreign_ids(self) -> None:
        counters = IdCounters()

        assert not counters.observe("launch-party")
        assert not counters.observe("widget_004")

    def test_observe_all_reports_any_change(self) -> None:
        counters = IdCounters()

        assert counters.observe_all(["idea_002", "nope"])
        assert not counters.observe_all(["idea_001"])

    def test_unknown_prefix_raises(self) -> None:
        with pytest.raises(KeyError):
            IdCounters().peek("widget")

    def test_reset_and_round_trip(self) -> None:
        counters = IdCounters({"effort": 4, "comment": "x"})  # pyright: ignore[reportArgumentType]

        assert counters.to_dict()["effort"] == 4
        assert counters.to_dict()["comment"] == 1

        counters.reset()

        assert counters.to_dict()["effort"] == 1
