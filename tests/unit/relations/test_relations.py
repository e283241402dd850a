from collections.abc import Set as AbstractSet

import pytest
import structlog
from structlog.testing import capture_logs

from tracker.exceptions import RelationshipWarning
from tracker.relations import (
    OnDelete,
    RelationshipValidator,
    check_references,
    referenced_collections,
    references_from,
    references_to,
)

EXISTING: dict[str, set[str]] = {
    "ideas": {"idea_001"},
    "events": set(),
    "tasks": {"task_001", "task_002"},
    "subtasks": {"subtask_001"},
}


def lookup(collection: str) -> AbstractSet[str]:
    return EXISTING[collection]


class TestReferenceGraph:
    def test_projects_reference_ideas_events_and_tasks(self) -> None:
        assert {ref.field for ref in references_from("projects")} == {"ideaId", "eventId", "taskId"}

    def test_ideas_cascade_to_tasks(self) -> None:
        (ref,) = references_from("ideas")

        assert ref.target == "tasks"
        assert ref.on_source_delete is OnDelete.CASCADE

    def test_tasks_cascade_to_subtasks(self) -> None:
        (ref,) = references_from("tasks")

        assert ref.field == "subtaskIds"
        assert ref.on_source_delete is OnDelete.CASCADE

    def test_projects_do_not_cascade(self) -> None:
        assert all(ref.on_source_delete is OnDelete.KEEP for ref in references_from("projects"))

    def test_tasks_are_referenced_by_projects_and_ideas(self) -> None:
        assert {ref.source for ref in references_to("tasks")} == {"projects", "ideas"}

    def test_subtasks_reference_nothing(self) -> None:
        assert referenced_collections("subtasks") == ()


class TestCheckReferences:
    def test_passes_when_every_reference_resolves(self) -> None:
        task = {"id": "task_001", "subtaskIds": ["subtask_001"]}

        check_references("tasks", task, lookup)

    def test_ignores_empty_or_missing_arrays(self) -> None:
        check_references("projects", {"id": "proj_001", "ideaId": []}, lookup)

    def test_raises_with_dangling_ids_per_field(self) -> None:
        project = {"id": "proj_001", "ideaId": ["idea_001", "idea_404"], "taskId": ["task_404"]}

        with pytest.raises(RelationshipWarning) as exc_info:
            check_references("projects", project, lookup)

        assert exc_info.value.dangling == {"ideaId": ("idea_404",), "taskId": ("task_404",)}
        assert exc_info.value.record_id == "proj_001"

    def test_reports_unhashable_entries_instead_of_failing(self) -> None:
        task = {"id": "task_001", "subtaskIds": [["subtask_001"]]}

        with pytest.raises(RelationshipWarning) as exc_info:
            check_references("tasks", task, lookup)

        assert exc_info.value.dangling == {"subtaskIds": (["subtask_001"],)}


class TestRelationshipValidator:
    def test_logs_and_returns_dangling_references(self) -> None:
        validator = RelationshipValidator(logger=structlog.get_logger())
        idea = {"id": "idea_001", "taskIds": ["task_404"]}

        with capture_logs() as logs:
            dangling = validator.validate("ideas", idea, lookup)

        assert dangling == {"taskIds": ("task_404",)}
        assert logs[0]["event"] == "dangling_reference"
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["dangling"] == {"taskIds": ["task_404"]}

    def test_returns_empty_mapping_when_valid(self) -> None:
        validator = RelationshipValidator()

        assert validator.validate("ideas", {"id": "idea_001", "taskIds": ["task_001"]}, lookup) == {}

    def test_non_string_entries_are_dangling(self) -> None:
        validator = RelationshipValidator(logger=structlog.get_logger())
        project = {"id": "proj_001", "ideaId": [{"id": "idea_001"}, "idea_001", 7]}

        with capture_logs() as logs:
            dangling = validator.validate("projects", project, lookup)

        assert dangling == {"ideaId": ({"id": "idea_001"}, 7)}
        assert logs[0]["event"] == "dangling_reference"
