"""Fact-check findings for customized CV content."""

from pydantic import BaseModel, Field


class ProfileValidation(BaseModel):
    """Findings for the customized profile."""

    is_factually_accurate: bool
    fabricated_claims: list[str] = Field(
        default_factory=list,
        description="Exact quotes from the customized profile that are not in the CV",
    )
    unsupported_claims: list[str] = Field(default_factory=list)
    reasoning: str = ""
    corrected_profile: str = Field(
        default="",
        description="Only provided if corrections are needed, otherwise empty string",
    )

    @property
    def has_issues(self) -> bool:
        return not self.is_factually_accurate


class CompetenciesValidation(BaseModel):
    """Findings for the selected competencies."""

    unsupported_competencies: list[str] = Field(default_factory=list)
    reasoning: str = ""

    @property
    def has_issues(self) -> bool:
        return bool(self.unsupported_competencies)


class ProjectValidation(BaseModel):
    """Findings for one customized project."""

    project_name: str
    is_factually_accurate: bool = True
    fabricated_details: list[str] = Field(default_factory=list)
    unsupported_claims: list[str] = Field(default_factory=list)
    reasoning: str = ""
    corrected_description: str = Field(
        default="",
        description="Only provided if corrections are needed, otherwise empty string",
    )

    @property
    def has_quoted_issues(self) -> bool:
        """Whether any fabricated or unsupported text was quoted."""
        return bool(self.fabricated_details or self.unsupported_claims)


NO_ISSUES_REASONING = "No validation issues found"


class OverallValidation(BaseModel):
    """Summary verdict of the fact check."""

    passes_validation: bool
    confidence_score: float = Field(ge=0, le=10)
    summary: str = ""
    recommendations: list[str] = Field(default_factory=list)


class ContentValidation(BaseModel):
    """Complete fact-check result for profile, competencies and projects."""

    profile_validation: ProfileValidation
    competencies_validation: CompetenciesValidation
    projects_validation: list[ProjectValidation] = Field(default_factory=list)
    overall_validation: OverallValidation

    @property
    def projects_need_correction(self) -> bool:
        return any(p.has_quoted_issues for p in self.projects_validation)
