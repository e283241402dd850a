"""Forward-only stage lifecycles.

A lifecycle is a fixed total order of stage names. Records may stay where
they are or move forward, never back.
"""

from dataclasses import dataclass
from typing import Final

from tracker.enums import SubtaskStage, TaskWorkflowStatus
from tracker.exceptions import LifecycleError


@dataclass(frozen=True, slots=True)
class Lifecycle:
    """A named, totally ordered sequence of stages.

    Attributes:
        name: Human-readable name used in error messages.
        stages: Stage names from first to last.
    """

    name: str
    stages: tuple[str, ...]

    @property
    def first(self) -> str:
        return self.stages[0]

    @property
    def last(self) -> str:
        return self.stages[-1]

    def index(self, stage: str) -> int:
        """Position of a stage in the lifecycle.

        Raises:
            LifecycleError: If the stage is not part of this lifecycle.
        """
        try:
            return self.stages.index(stage)
        except ValueError as e:
            msg = f"Unknown {self.name} stage: {stage!r}. Must be one of: {', '.join(self.stages)}"
            raise LifecycleError(msg, current=stage) from e

    def can_transition(self, current: str, requested: str) -> bool:
        """Whether moving from ``current`` to ``requested`` keeps moving forward.

        Staying on the same stage counts as a valid transition.
        """
        return self.index(requested) >= self.index(current)

    def ensure_transition(self, current: str, requested: str) -> None:
        """Raise unless moving from ``current`` to ``requested`` is allowed.

        Raises:
            LifecycleError: If the transition would regress.
        """
        if not self.can_transition(current, requested):
            msg = (
                f"Cannot regress from {current} to {requested}. "
                f"{self.name.capitalize()} lifecycle only moves forward."
            )
            raise LifecycleError(msg, current=current, requested=requested)

    def advance(self, current: str) -> str:
        """Return the stage after ``current``.

        Raises:
            LifecycleError: If ``current`` is already the final stage.
        """
        position = self.index(current)
        if position == len(self.stages) - 1:
            msg = f"{self.name.capitalize()} is already at the final stage ({current})"
            raise LifecycleError(msg, current=current)
        return self.stages[position + 1]


SUBTASK_LIFECYCLE: Final = Lifecycle("subtask", tuple(stage.value for stage in SubtaskStage))

TASK_WORKFLOW: Final = Lifecycle("task", tuple(status.value for status in TaskWorkflowStatus))


def can_transition(current: str, requested: str) -> bool:
    """Subtask stage transition check."""
    return SUBTASK_LIFECYCLE.can_transition(current, requested)


def advance(current: str) -> str:
    """Next subtask stage."""
    return SUBTASK_LIFECYCLE.advance(current)


__all__ = [
    "SUBTASK_LIFECYCLE",
    "TASK_WORKFLOW",
    "Lifecycle",
    "advance",
    "can_transition",
]
