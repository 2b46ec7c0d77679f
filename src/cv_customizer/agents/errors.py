"""Stage failures raised by the agents."""

from enum import Enum

from cv_customizer.models.progress import StepId
from cv_customizer.models.quality import Criterion


class FailureKind(str, Enum):
    """Why a stage failed."""

    PROVIDER = "provider"  # the generation call itself failed
    SCHEMA = "schema"  # output rejected by the schema or a stage contract


class StageFailure(Exception):
    """A pipeline stage could not produce its output.

    The message is safe to show to users; the underlying provider or parser
    error is chained as ``__cause__``.
    """

    def __init__(self, step: StepId, kind: FailureKind, message: str):
        super().__init__(message)
        self.step = step
        self.kind = kind
        self.message = message


class StageAgentFailure(StageFailure):
    """Failure of a stage agent; the step is fixed by the subclass."""

    step_id: StepId
    default_message: str

    def __init__(self, kind: FailureKind, message: str | None = None):
        super().__init__(self.step_id, kind, message or self.default_message)


class RequirementsAnalysisFailed(StageAgentFailure):
    step_id = StepId.REQUIREMENTS_ANALYSIS
    default_message = "Failed to analyze customer requirements"


class ProfileCustomizationFailed(StageAgentFailure):
    step_id = StepId.PROFILE_CUSTOMIZATION
    default_message = "Failed to customize CV profile"


class CompetenciesCustomizationFailed(StageAgentFailure):
    step_id = StepId.COMPETENCIES_CUSTOMIZATION
    default_message = "Failed to customize competencies"


class ProjectsCustomizationFailed(StageAgentFailure):
    step_id = StepId.PROJECTS_CUSTOMIZATION
    default_message = "Failed to customize project descriptions"


class EvaluationFailed(StageAgentFailure):
    step_id = StepId.EVALUATION
    default_message = "Failed to evaluate customized CV"


class ContentValidationFailed(StageAgentFailure):
    step_id = StepId.CONTENT_VALIDATION
    default_message = "Failed to validate customized CV content"


class ProfileCorrectionFailed(StageAgentFailure):
    step_id = StepId.PROFILE_CORRECTION
    default_message = "Failed to correct profile content"


class CompetenciesCorrectionFailed(StageAgentFailure):
    step_id = StepId.COMPETENCIES_CORRECTION
    default_message = "Failed to correct competencies content"


class ProjectsCorrectionFailed(StageAgentFailure):
    step_id = StepId.PROJECTS_CORRECTION
    default_message = "Failed to correct projects content"


class CriterionFailed(Exception):
    """A quality criterion of the CV analysis could not be rated."""

    criterion: Criterion
    default_message: str

    def __init__(self, kind: FailureKind, message: str | None = None):
        message = message or self.default_message
        super().__init__(message)
        self.kind = kind
        self.message = message


class LanguageQualityFailed(CriterionFailed):
    criterion = Criterion.LANGUAGE_QUALITY
    default_message = "Failed to evaluate language quality"


class ContentCompletenessFailed(CriterionFailed):
    criterion = Criterion.CONTENT_COMPLETENESS
    default_message = "Failed to evaluate content completeness"


class SummaryQualityFailed(CriterionFailed):
    criterion = Criterion.SUMMARY_QUALITY
    default_message = "Failed to evaluate summary quality"


class ProjectDescriptionsFailed(CriterionFailed):
    criterion = Criterion.PROJECT_DESCRIPTIONS
    default_message = "Failed to evaluate project descriptions"


class CompetenceVerificationFailed(CriterionFailed):
    criterion = Criterion.COMPETENCE_VERIFICATION
    default_message = "Failed to verify competencies"
