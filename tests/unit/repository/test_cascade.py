from tracker._types import Record
from tracker.repository import CascadeStep, StepKind, plan_cascade
from tracker.repository._cascade import strip_reference

DATA: dict[str, dict[str, Record]] = {
    "projects": {"proj_001": {"id": "proj_001", "taskId": ["task_001"]}},
    "ideas": {"idea_001": {"id": "idea_001", "taskIds": ["task_001", "task_002", "task_404"]}},
    "events": {},
    "tasks": {
        "task_001": {"id": "task_001", "subtaskIds": ["subtask_001"]},
        "task_002": {"id": "task_002", "subtaskIds": []},
    },
    "subtasks": {"subtask_001": {"id": "subtask_001"}},
}


def find(collection: str, record_id: str) -> Record | None:
    return DATA[collection].get(record_id)


class TestPlanCascade:
    def test_idea_cascades_to_tasks_and_subtasks(self) -> None:
        plan = plan_cascade("ideas", "idea_001", find)

        assert plan.removed == (
            ("subtasks", "subtask_001"),
            ("tasks", "task_001"),
            ("tasks", "task_002"),
            ("ideas", "idea_001"),
        )

    def test_missing_children_are_skipped(self) -> None:
        plan = plan_cascade("ideas", "idea_001", find)

        assert plan.skipped == (("tasks", "task_404"),)

    def test_children_are_removed_before_parent(self) -> None:
        plan = plan_cascade("tasks", "task_001", find)

        assert plan.steps == (
            CascadeStep(StepKind.STRIP, "tasks", "subtask_001", "subtaskIds"),
            CascadeStep(StepKind.REMOVE, "subtasks", "subtask_001"),
            CascadeStep(StepKind.STRIP, "projects", "task_001", "taskId"),
            CascadeStep(StepKind.STRIP, "ideas", "task_001", "taskIds"),
            CascadeStep(StepKind.REMOVE, "tasks", "task_001"),
        )

    def test_project_delete_removes_only_the_project(self) -> None:
        plan = plan_cascade("projects", "proj_001", find)

        assert plan.steps == (CascadeStep(StepKind.REMOVE, "projects", "proj_001"),)

    def test_missing_root_yields_empty_plan(self) -> None:
        plan = plan_cascade("tasks", "task_404", find)

        assert plan.steps == ()
        assert plan.skipped == (("tasks", "task_404"),)

    def test_describe_steps(self) -> None:
        strip = CascadeStep(StepKind.STRIP, "ideas", "task_001", "taskIds")
        remove = CascadeStep(StepKind.REMOVE, "tasks", "task_001")

        assert strip.describe() == "stripped task_001 from ideas.taskIds"
        assert remove.describe() == "removed tasks/task_001"


class TestStripReference:
    def test_removes_id_and_reports_changed_indexes(self) -> None:
        records: list[Record] = [
            {"id": "idea_001", "taskIds": ["task_001", "task_002"]},
            {"id": "idea_002", "taskIds": ["task_002"]},
            {"id": "idea_003"},
        ]

        changed = strip_reference(records, "taskIds", "task_002")

        assert changed == [0, 1]
        assert records[0]["taskIds"] == ["task_001"]
        assert records[1]["taskIds"] == []
        assert "taskIds" not in records[2]
