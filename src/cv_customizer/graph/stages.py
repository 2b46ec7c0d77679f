"""Ordered stage table of the customization pipeline."""

from collections.abc import Sequence
from typing import NamedTuple

from cv_customizer.models.progress import StepId

# State keys supplied by the caller before the first stage runs
PIPELINE_INPUTS: frozenset[str] = frozenset(
    {"cv_upload", "requirement_uploads", "provider", "model"}
)

COMPLETE_PROGRESS = 100.0


class StageDescriptor(NamedTuple):
    """One pipeline stage: what it reads, what it writes, where progress stands."""

    step: StepId
    requires: frozenset[str]
    produces: frozenset[str]
    start_progress: float
    done_progress: float


def _stage(
    step: StepId,
    requires: tuple[str, ...],
    produces: tuple[str, ...],
    start: float,
    done: float,
) -> StageDescriptor:
    return StageDescriptor(step, frozenset(requires), frozenset(produces), start, done)


_CUSTOMIZED = ("profile_customization", "key_competencies", "customized_projects")

STAGES: tuple[StageDescriptor, ...] = (
    _stage(StepId.VALIDATION, ("cv_upload", "requirement_uploads", "provider", "model"), (), 5, 10),
    _stage(
        StepId.FILE_PROCESSING,
        ("cv_upload", "requirement_uploads"),
        ("cv_document", "requirement_documents"),
        15,
        20,
    ),
    _stage(StepId.LANGUAGE_DETECTION, ("cv_document",), ("language",), 25, 30),
    _stage(
        StepId.REQUIREMENTS_ANALYSIS,
        ("requirement_documents", "language"),
        ("customer_requirements",),
        35,
        45,
    ),
    _stage(
        StepId.PROFILE_CUSTOMIZATION,
        ("cv_document", "customer_requirements", "language"),
        ("profile_customization",),
        50,
        55,
    ),
    _stage(
        StepId.COMPETENCIES_CUSTOMIZATION,
        ("cv_document", "customer_requirements", "language"),
        ("key_competencies",),
        58,
        62,
    ),
    _stage(
        StepId.PROJECTS_CUSTOMIZATION,
        ("cv_document", "customer_requirements", "language"),
        ("customized_projects",),
        65,
        70,
    ),
    _stage(
        StepId.EVALUATION,
        ("customer_requirements", *_CUSTOMIZED, "language"),
        ("evaluation",),
        75,
        80,
    ),
    _stage(
        StepId.CONTENT_VALIDATION,
        ("cv_document", *_CUSTOMIZED, "language"),
        ("validation",),
        85,
        90,
    ),
    _stage(
        StepId.PROFILE_CORRECTION,
        ("cv_document", "profile_customization", "validation", "customer_requirements", "language"),
        ("profile_correction",),
        91,
        92,
    ),
    _stage(
        StepId.COMPETENCIES_CORRECTION,
        ("cv_document", "key_competencies", "validation", "customer_requirements", "language"),
        ("competencies_correction",),
        93,
        94,
    ),
    _stage(
        StepId.PROJECTS_CORRECTION,
        ("cv_document", "customized_projects", "validation", "customer_requirements", "language"),
        ("projects_correction",),
        95,
        96,
    ),
    _stage(
        StepId.CORRECTION_CHECK,
        (
            "customer_requirements",
            *_CUSTOMIZED,
            "evaluation",
            "validation",
            "profile_correction",
            "competencies_correction",
            "projects_correction",
            "language",
        ),
        ("correction", "result"),
        97,
        97,
    ),
)


def validate_stage_order(
    stages: Sequence[StageDescriptor],
    inputs: frozenset[str] = PIPELINE_INPUTS,
) -> None:
    """Check that a stage table can run front to back.

    Raises:
        ValueError: If a stage appears twice, reads state that no earlier
            stage or pipeline input provides, or moves progress backwards.
    """
    available = set(inputs)
    seen: set[StepId] = set()
    last_progress = 0.0
    for stage in stages:
        if stage.step in seen:
            raise ValueError(f"Stage {stage.step.value} appears more than once")
        seen.add(stage.step)

        missing = stage.requires - available
        if missing:
            raise ValueError(
                f"Stage {stage.step.value} requires {sorted(missing)} "
                "before any earlier stage produces it"
            )
        if stage.start_progress < last_progress or stage.done_progress < stage.start_progress:
            raise ValueError(f"Stage {stage.step.value} moves progress backwards")

        last_progress = stage.done_progress
        available |= stage.produces

    if last_progress > COMPLETE_PROGRESS:
        raise ValueError("Stage progress exceeds completion")


def stage_for(step: StepId) -> StageDescriptor:
    for stage in STAGES:
        if stage.step == step:
            return stage
    raise KeyError(step)
