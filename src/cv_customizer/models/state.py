"""LangGraph state models."""

from typing import TypedDict

from cv_customizer.models.correction import (
    CompetenciesCorrection,
    CorrectionReport,
    ProfileCorrection,
    ProjectsCorrection,
)
from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.evaluation import Evaluation
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.result import CustomizationResult
from cv_customizer.models.validation import ContentValidation


class StepTiming(TypedDict):
    """Timing information for a single pipeline step."""

    step_name: str
    start_time: float  # Unix timestamp
    end_time: float
    duration_seconds: float


class CustomizationState(TypedDict):
    """Main state object for the CV customization pipeline."""

    # Raw uploads (bytes + filename), checked by the file processing step
    cv_upload: tuple[bytes, str] | None
    requirement_uploads: list[tuple[bytes, str]]

    # Run parameters
    provider: str
    model: str

    # Loaded documents
    cv_document: SourceDocument | None
    requirement_documents: list[SourceDocument]

    # Stage outputs
    language: LanguageDetection | None
    customer_requirements: CustomerRequirements | None
    profile_customization: ProfileCustomization | None
    key_competencies: KeyCompetencies | None
    customized_projects: list[ProjectCustomization] | None
    evaluation: Evaluation | None
    validation: ContentValidation | None
    profile_correction: ProfileCorrection | None
    competencies_correction: CompetenciesCorrection | None
    projects_correction: ProjectsCorrection | None
    correction: CorrectionReport | None

    # Output
    result: CustomizationResult | None

    # Progress tracking
    last_progress: float
    step_timings: list[StepTiming]
    total_time: float | None

    # Workflow tracking
    current_step: str
    errors: list[str]
    failed_step: str | None
    failure_kind: str | None
    failure_cause: str | None
