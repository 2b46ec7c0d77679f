"""Progress tracking for the customization pipeline.

The pipeline reports progress through a ``ProgressChannel``: a callable that
receives one ``ProgressUpdate`` at a time, in pipeline order. A
``ProgressTracker`` is a channel that folds those updates into per-step state
for display.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Literal

from cv_customizer.models.progress import STEP_NAMES, ProgressUpdate, StepId

ProgressChannel = Callable[[ProgressUpdate], None]

StepStatus = Literal["pending", "running", "completed", "error"]

TERMINAL_STATUSES: frozenset[str] = frozenset({"completed", "error"})

INITIAL_MESSAGE = "Initializing..."

_STATUS_MAP: dict[str, StepStatus] = {
    "starting": "running",
    "completed": "completed",
    "error": "error",
}


@dataclass(frozen=True)
class StepState:
    """Display state of one pipeline step."""

    step: StepId
    status: StepStatus = "pending"
    message: str | None = None
    data: Any = None

    @property
    def name(self) -> str:
        return STEP_NAMES[self.step]


@dataclass(frozen=True)
class ProgressSnapshot:
    """Immutable view of a tracker at one point in time."""

    progress: float
    message: str
    steps: tuple[StepState, ...]
    completed: bool


def _initial_steps() -> dict[StepId, StepState]:
    return {step: StepState(step=step) for step in StepId}


class ProgressTracker:
    """Fold progress updates into per-step state.

    The tracker never computes progress itself: it shows the value carried
    by the latest applied update. Updates for a step that already completed
    or failed are ignored. ``on_error`` fires for every error update and
    ``on_complete`` fires once, for the first ``complete`` update carrying
    data.
    """

    def __init__(
        self,
        on_complete: Callable[[Any], None] | None = None,
        on_error: Callable[[str], None] | None = None,
        visible: bool = True,
    ):
        self.on_complete = on_complete
        self.on_error = on_error
        self._visible = visible
        self.reset()

    def reset(self) -> None:
        self._steps = _initial_steps()
        self.progress = 0.0
        self.message = INITIAL_MESSAGE
        self._completion_fired = False

    @property
    def visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        """Show or hide the tracker; becoming visible starts from a clean state."""
        if visible and not self._visible:
            self.reset()
        self._visible = visible

    @property
    def steps(self) -> list[StepState]:
        return list(self._steps.values())

    def step(self, step_id: StepId | str) -> StepState:
        return self._steps[StepId(step_id)]

    def update(self, update: ProgressUpdate | dict) -> None:
        """Apply one update.

        Args:
            update: A ProgressUpdate, or its wire form as a dict.
        """
        if not isinstance(update, ProgressUpdate):
            update = ProgressUpdate.model_validate(update)

        current = self._steps[update.step]
        if current.status in TERMINAL_STATUSES:
            return

        self.progress = update.progress
        self.message = update.message
        self._steps[update.step] = replace(
            current,
            status=_STATUS_MAP[update.status],
            message=update.message,
            data=update.data,
        )

        if update.status == "error" and self.on_error:
            self.on_error(update.message)

        if (
            update.step == StepId.COMPLETE
            and update.status == "completed"
            and update.data is not None
            and not self._completion_fired
        ):
            self._completion_fired = True
            if self.on_complete:
                self.on_complete(update.data)

    __call__ = update

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            progress=self.progress,
            message=self.message,
            steps=tuple(self._steps.values()),
            completed=self._completion_fired,
        )


def describe_step(state: StepState) -> str | None:
    """Short summary of a completed step's data, for display under the step name."""
    data = state.data
    if state.status != "completed" or not isinstance(data, dict):
        if state.step == StepId.CORRECTION_CHECK and state.status == "completed":
            return "No correction needed"
        return None

    step = state.step
    if step == StepId.LANGUAGE_DETECTION and data.get("language"):
        confidence = round(data.get("confidence", 0) * 100)
        return f"Language: {data['language']} ({confidence}% confidence)"
    if step == StepId.REQUIREMENTS_ANALYSIS:
        return (
            f"{data.get('must_have_count', 0)} must-have, "
            f"{data.get('should_have_count', 0)} should-have requirements"
        )
    if step == StepId.COMPETENCIES_CUSTOMIZATION and "relevant_count" in data:
        return f"{data['relevant_count']} relevant competencies identified"
    if step == StepId.PROJECTS_CUSTOMIZATION and "projects_count" in data:
        return f"{data['projects_count']} projects customized"
    if step == StepId.EVALUATION and "overall_score" in data:
        return f"Overall score: {data['overall_score']}/10"
    if step == StepId.CONTENT_VALIDATION:
        verdict = "Passed" if data.get("passes") else "Failed"
        return f"{verdict} (confidence: {data.get('confidence', 0):.1f}/10)"
    if step == StepId.PROFILE_CORRECTION:
        return (
            f"{data.get('changes_made', 0)} changes made "
            f"(confidence: {data.get('confidence', 0):.1f}/10)"
        )
    if step == StepId.COMPETENCIES_CORRECTION:
        return (
            f"{data.get('removed_count', 0)} items removed "
            f"(confidence: {data.get('confidence', 0):.1f}/10)"
        )
    if step == StepId.PROJECTS_CORRECTION:
        return (
            f"{data.get('projects_corrected', 0)} projects updated "
            f"(confidence: {data.get('confidence', 0):.1f}/10)"
        )
    if step == StepId.CORRECTION_CHECK:
        return f"{data.get('issues_fixed', 0)} issues fixed"
    return None
