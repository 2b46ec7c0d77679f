"""Stage agents: one structured generation call per pipeline stage."""

from cv_customizer.agents.correction import (
    CompetenciesCorrector,
    ProfileCorrector,
    ProjectsCorrector,
)
from cv_customizer.agents.customization import (
    CompetenciesCustomizer,
    ProfileCustomizer,
    ProjectsCustomizer,
)
from cv_customizer.agents.errors import CriterionFailed, FailureKind, StageFailure
from cv_customizer.agents.evaluation import CVEvaluator
from cv_customizer.agents.language import LanguageDetector
from cv_customizer.agents.quality import CRITERION_AGENTS, AnalysisSummarizer
from cv_customizer.agents.requirements import RequirementsAnalyzer
from cv_customizer.agents.validation import ContentValidator

__all__ = [
    "CRITERION_AGENTS",
    "AnalysisSummarizer",
    "CVEvaluator",
    "CompetenciesCorrector",
    "CompetenciesCustomizer",
    "ContentValidator",
    "CriterionFailed",
    "FailureKind",
    "LanguageDetector",
    "ProfileCorrector",
    "ProfileCustomizer",
    "ProjectsCorrector",
    "ProjectsCustomizer",
    "RequirementsAnalyzer",
    "StageFailure",
]
