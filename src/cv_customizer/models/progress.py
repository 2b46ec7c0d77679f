"""Progress messages emitted by the customization pipeline."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class StepId(str, Enum):
    """Identifiers of the pipeline steps. The values are a wire contract."""

    VALIDATION = "validation"
    FILE_PROCESSING = "file_processing"
    LANGUAGE_DETECTION = "language_detection"
    REQUIREMENTS_ANALYSIS = "requirements_analysis"
    PROFILE_CUSTOMIZATION = "profile_customization"
    COMPETENCIES_CUSTOMIZATION = "competencies_customization"
    PROJECTS_CUSTOMIZATION = "projects_customization"
    EVALUATION = "evaluation"
    CONTENT_VALIDATION = "content_validation"
    PROFILE_CORRECTION = "profile_correction"
    COMPETENCIES_CORRECTION = "competencies_correction"
    PROJECTS_CORRECTION = "projects_correction"
    CORRECTION_CHECK = "correction_check"
    COMPLETE = "complete"


# Display names in pipeline order
STEP_NAMES: dict[StepId, str] = {
    StepId.VALIDATION: "Input Validation",
    StepId.FILE_PROCESSING: "File Processing",
    StepId.LANGUAGE_DETECTION: "Language Detection",
    StepId.REQUIREMENTS_ANALYSIS: "Requirements Analysis",
    StepId.PROFILE_CUSTOMIZATION: "Profile Customization",
    StepId.COMPETENCIES_CUSTOMIZATION: "Competencies Customization",
    StepId.PROJECTS_CUSTOMIZATION: "Projects Customization",
    StepId.EVALUATION: "CV Evaluation",
    StepId.CONTENT_VALIDATION: "Content Validation",
    StepId.PROFILE_CORRECTION: "Profile Correction",
    StepId.COMPETENCIES_CORRECTION: "Competencies Correction",
    StepId.PROJECTS_CORRECTION: "Projects Correction",
    StepId.CORRECTION_CHECK: "Correction Check",
    StepId.COMPLETE: "Completion",
}

ProgressStatus = Literal["starting", "completed", "error"]


class ProgressUpdate(BaseModel):
    """One progress event: {step, status, message, data, progress}."""

    step: StepId
    status: ProgressStatus
    message: str
    data: Any = None
    progress: float = Field(default=0, ge=0, le=100)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with plain string step ids."""
        return self.model_dump(mode="json")
