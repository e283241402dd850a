import pendulum

from tracker._types import Record
from tracker.enums import SchemaVersion
from tracker.repository import compute_statistics
from tracker.repository._statistics import count_by, count_linked

NOW = pendulum.datetime(2025, 6, 1, 12, tz="UTC")


def _data() -> dict[str, list[Record]]:
    return {
        "projects": [
            {"id": "proj_001", "taskId": ["task_001"]},
            {"id": "proj_002", "taskId": []},
        ],
        "ideas": [{"id": "idea_001", "taskIds": ["task_001", "task_002"]}],
        "events": [
            {"id": "event_001", "eventDate": "2025-07-01", "status": "scheduled"},
            {"id": "event_002", "eventDate": "2025-05-01", "status": "planning"},
            {"id": "event_003", "eventDate": "2025-05-01", "status": "completed"},
            {"id": "event_004", "eventDate": "garbage"},
        ],
        "tasks": [
            {"id": "task_001", "dueDate": "2025-01-01", "doneStatus": "ready_to_test", "subtaskIds": ["s"]},
            {"id": "task_002", "dueDate": "2025-01-01", "doneStatus": "production_done", "subtaskIds": []},
            {"id": "task_003", "dueDate": "2025-12-01", "doneStatus": "ready_to_analyze"},
        ],
        "subtasks": [
            {"id": "subtask_001", "taskType": "Analyze"},
            {"id": "subtask_002", "taskType": "Test"},
            {"id": "subtask_003", "taskType": "Test"},
        ],
    }


class TestReducers:
    def test_count_by_includes_zero_counts(self) -> None:
        counts = count_by([{"s": "a"}, {"s": "a"}, {"s": "z"}, {"s": ["a"]}], "s", ("a", "b"))

        assert counts == {"a": 2, "b": 0}

    def test_count_linked_requires_non_empty_list(self) -> None:
        records: list[Record] = [{"ids": ["x"]}, {"ids": []}, {"ids": "x"}, {}]

        assert count_linked(records, "ids") == 1


class TestComputeStatistics:
    def test_link_counts(self) -> None:
        stats = compute_statistics(_data(), version=SchemaVersion.V2, now=NOW)

        assert stats.projects.total == 2
        assert stats.projects.with_tasks == 1
        assert stats.ideas.total == 1
        assert stats.ideas.with_tasks == 1

    def test_event_counts(self) -> None:
        stats = compute_statistics(_data(), version=SchemaVersion.V2, now=NOW)

        assert stats.events.total == 4
        assert stats.events.upcoming == 1
        assert stats.events.completed == 1
        assert stats.events.overdue == 1
        assert stats.events.by_status["planning"] == 1
        assert stats.events.by_status["cancelled"] == 0

    def test_task_counts_use_workflow_statuses(self) -> None:
        stats = compute_statistics(_data(), version=SchemaVersion.V2, now=NOW)

        assert stats.tasks.total == 3
        assert stats.tasks.with_subtasks == 1
        assert stats.tasks.past_due == 1
        assert len(stats.tasks.by_status) == 8
        assert stats.tasks.by_status["production_done"] == 1

    def test_task_counts_use_legacy_statuses_in_v1(self) -> None:
        data = {"tasks": [{"id": "task_001", "dueDate": "2025-01-01", "doneStatus": "complete"}]}

        stats = compute_statistics(data, version=SchemaVersion.V1, now=NOW)

        assert stats.tasks.by_status == {"pending": 0, "incomplete": 0, "complete": 1, "overdue": 0}
        assert stats.tasks.past_due == 0

    def test_subtask_counts_by_stage(self) -> None:
        stats = compute_statistics(_data(), version=SchemaVersion.V2, now=NOW)

        assert stats.subtasks.by_stage == {"Analyze": 1, "Development": 0, "Test": 2, "Production": 0}

    def test_missing_collections_count_as_empty(self) -> None:
        stats = compute_statistics({}, version=SchemaVersion.V2, now=NOW)

        assert stats.projects.total == 0
        assert stats.events.upcoming == 0

    def test_to_dict_is_plain_data(self) -> None:
        stats = compute_statistics(_data(), version=SchemaVersion.V2, now=NOW)

        result = stats.to_dict()

        assert result["subtasks"]["total"] == 3
        assert result["now"] == "2025-06-01T12:00:00Z"
