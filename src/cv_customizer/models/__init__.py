"""Data models for CV Customizer."""

from cv_customizer.models.correction import (
    CompetenciesCorrection,
    CorrectedProject,
    CorrectionReport,
    ProfileCorrection,
    ProjectsCorrection,
)
from cv_customizer.models.customization import (
    KeyCompetencies,
    ParcAnalysis,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.evaluation import Evaluation, RequirementCoverage
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.progress import ProgressUpdate, StepId
from cv_customizer.models.quality import CVAnalysis, Criterion, CriterionRating
from cv_customizer.models.requirements import CustomerRequirements, Requirement
from cv_customizer.models.result import CustomizationResult
from cv_customizer.models.validation import (
    CompetenciesValidation,
    ContentValidation,
    ProfileValidation,
    ProjectValidation,
)

__all__ = [
    "CVAnalysis",
    "CompetenciesCorrection",
    "CompetenciesValidation",
    "ContentValidation",
    "CorrectedProject",
    "CorrectionReport",
    "Criterion",
    "CriterionRating",
    "CustomerRequirements",
    "CustomizationResult",
    "Evaluation",
    "KeyCompetencies",
    "LanguageDetection",
    "ParcAnalysis",
    "ProfileCorrection",
    "ProfileCustomization",
    "ProfileValidation",
    "ProgressUpdate",
    "ProjectCustomization",
    "ProjectValidation",
    "ProjectsCorrection",
    "Requirement",
    "RequirementCoverage",
    "SourceDocument",
    "StepId",
]
