"""Progress panel for Streamlit UI, driven by a ProgressTracker."""

import html

import streamlit as st

from cv_customizer.models.progress import ProgressUpdate, StepId
from cv_customizer.progress import ProgressSnapshot, ProgressTracker, StepState, describe_step

# Steps shown in the checklist; COMPLETE is reported by the status label instead
CHECKLIST_STEPS: tuple[StepId, ...] = tuple(step for step in StepId if step != StepId.COMPLETE)

SKIPPABLE_STEPS = frozenset(
    {StepId.PROFILE_CORRECTION, StepId.COMPETENCIES_CORRECTION, StepId.PROJECTS_CORRECTION}
)

_ICONS = {
    "completed": ('<span style="color: #28a745;">&#10003;</span>', "color: #28a745;"),
    "error": (
        '<span style="color: #dc3545;">&#10007;</span>',
        "color: #dc3545; font-weight: bold;",
    ),
    "running": ('<span class="step-spinner">&#9680;</span>', "color: #007bff; font-weight: bold;"),
    "pending": ('<span style="color: #6c757d;">&#9675;</span>', "color: #6c757d;"),
}


def render_step_line(state: StepState) -> str:
    icon, style = _ICONS[state.status]
    label = html.escape(state.name)
    if state.status == "running" and state.message:
        label = html.escape(state.message.rstrip("."))

    line = f'<div style="margin: 4px 0; {style}">{icon} {label}'
    summary = describe_step(state)
    if summary:
        line += f' <span class="step-summary">- {html.escape(summary)}</span>'
    return line + "</div>"


def render_step_checklist(snapshot: ProgressSnapshot, hide_pending_skips: bool = False) -> str:
    """Render the step checklist as HTML with status icons.

    Args:
        snapshot: Tracker snapshot to render.
        hide_pending_skips: Leave out correction steps that never ran. Used
            once the run is over, when a pending correction step was skipped.

    Returns:
        HTML string for the checklist.
    """
    lines = []
    for state in snapshot.steps:
        if state.step not in CHECKLIST_STEPS:
            continue
        if hide_pending_skips and state.step in SKIPPABLE_STEPS and state.status == "pending":
            continue
        lines.append(render_step_line(state))
    return "\n".join(lines)


class ProgressPanel:
    """Streamlit placeholders that redraw on every progress update.

    The panel itself is the progress channel of a run.
    """

    def __init__(self, tracker: ProgressTracker | None = None):
        self.bar = st.progress(0.0, text="Initializing...")
        self.checklist = st.empty()
        self.tracker = tracker or ProgressTracker()

    def __call__(self, update: ProgressUpdate) -> None:
        self.tracker.update(update)
        self.redraw()

    def redraw(self, finished: bool = False) -> None:
        snapshot = self.tracker.snapshot()
        self.bar.progress(min(snapshot.progress / 100.0, 1.0), text=snapshot.message)
        self.checklist.markdown(
            f'<div class="step-checklist">'
            f"{render_step_checklist(snapshot, hide_pending_skips=finished)}</div>",
            unsafe_allow_html=True,
        )
