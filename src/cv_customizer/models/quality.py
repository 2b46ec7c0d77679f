"""CV quality analysis models."""

from enum import Enum

from pydantic import BaseModel, Field

# Criteria scoring at least this are reported as strengths
STRENGTH_THRESHOLD = 7.0


class Criterion(str, Enum):
    """Quality criteria rated by the analysis, in report order."""

    LANGUAGE_QUALITY = "language_quality"
    CONTENT_COMPLETENESS = "content_completeness"
    SUMMARY_QUALITY = "summary_quality"
    PROJECT_DESCRIPTIONS = "project_descriptions"
    COMPETENCE_VERIFICATION = "competence_verification"


CRITERION_NAMES: dict[Criterion, str] = {
    Criterion.LANGUAGE_QUALITY: "Language Quality",
    Criterion.CONTENT_COMPLETENESS: "Content Completeness",
    Criterion.SUMMARY_QUALITY: "Summary Quality",
    Criterion.PROJECT_DESCRIPTIONS: "Project Descriptions",
    Criterion.COMPETENCE_VERIFICATION: "Competence Verification",
}

CRITERION_DESCRIPTIONS: dict[Criterion, str] = {
    Criterion.LANGUAGE_QUALITY: (
        "Grammar, spelling, flow and professional tone; third-person perspective "
        "and action-oriented language."
    ),
    Criterion.CONTENT_COMPLETENESS: (
        "Summary, projects, technology, competencies, roles, education, courses, "
        "certifications and languages are all present."
    ),
    Criterion.SUMMARY_QUALITY: (
        "Strong opening, key skills and experiences, and demonstrated value."
    ),
    Criterion.PROJECT_DESCRIPTIONS: (
        "Structure, action-oriented language, role clarity, value contribution "
        "and the PARK method."
    ),
    Criterion.COMPETENCE_VERIFICATION: (
        "Every listed competency and role is demonstrated in a project description."
    ),
}

SCORE_DESCRIPTION = "Rating from 0 to 10; use the full range, e.g. 3.5, 5.7 or 8.2"


class CriterionRating(BaseModel):
    """Rating of one quality criterion."""

    score: float = Field(ge=0, le=10, description=SCORE_DESCRIPTION)
    reasoning: str = ""
    suggestions: list[str] = Field(default_factory=list)
    improved_version: str | None = Field(
        default=None, description="Improved version of problematic text, where applicable"
    )


class ElementCheck(BaseModel):
    """Presence of one standard CV element."""

    element: str
    present: bool
    comment: str = ""


class ContentCompleteness(CriterionRating):
    element_verification: list[ElementCheck] = Field(default_factory=list)


class SummaryQuality(CriterionRating):
    original_summary: str = Field(default="", description="The summary exactly as in the CV")
    improved_version: str | None = Field(
        default=None, description="Rewritten summary keeping the person's experience and skills"
    )


class ProjectEvaluation(BaseModel):
    """Rating of one project description."""

    project_name: str
    score: float = Field(ge=0, le=10)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    improved_version: str | None = None


class ProjectDescriptions(CriterionRating):
    project_evaluations: list[ProjectEvaluation] = Field(default_factory=list)

    def with_score_from_projects(self) -> "ProjectDescriptions":
        """Replace an overall score of 0 by the mean of the per-project scores.

        Models sometimes rate every project but leave the overall score at 0.
        """
        if self.score != 0 or not self.project_evaluations:
            return self
        mean = sum(p.score for p in self.project_evaluations) / len(self.project_evaluations)
        return self.model_copy(update={"score": round(mean, 1)})


class CompetenceVerification(CriterionRating):
    unverified_competencies: list[str] = Field(default_factory=list)
    unverified_roles: list[str] = Field(default_factory=list)


class AnalysisSummary(BaseModel):
    """Short written synthesis of all criterion ratings."""

    summary: str = Field(
        description="Overall quality, key strengths, priority improvements and action steps"
    )


class CVAnalysis(BaseModel):
    """Complete quality analysis of one CV."""

    language_code: str = "en"
    overall_score: float = Field(ge=0, le=10)
    summary: str = ""
    key_strengths: list[str] = Field(default_factory=list)
    key_improvement_areas: list[str] = Field(default_factory=list)
    language_quality: CriterionRating
    content_completeness: ContentCompleteness
    summary_quality: SummaryQuality
    project_descriptions: ProjectDescriptions
    competence_verification: CompetenceVerification

    def ratings(self) -> list[tuple[Criterion, CriterionRating]]:
        """Every criterion with its rating, in report order."""
        return [(criterion, getattr(self, criterion.value)) for criterion in Criterion]
