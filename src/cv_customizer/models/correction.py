"""Structured outputs of the correction stages and their combined report."""

from pydantic import BaseModel, Field

from cv_customizer.models.customization import ParcAnalysis

NO_CHANGES_NEEDED = "No changes needed"


class ProfileCorrection(BaseModel):
    """Corrected profile with the changes that were made."""

    corrected_profile: str
    changes_made: list[str] = Field(default_factory=list)
    preserved_customizations: list[str] = Field(default_factory=list)
    reasoning: str = ""
    confidence_score: float = Field(ge=0, le=10)


class CompetenciesCorrection(BaseModel):
    """Competency list with unsupported entries removed."""

    corrected_competencies: list[str] = Field(default_factory=list)
    removed_competencies: list[str] = Field(default_factory=list)
    preserved_competencies: list[str] = Field(default_factory=list)
    reasoning: str = ""
    confidence_score: float = Field(ge=0, le=10)


class CorrectedProject(BaseModel):
    """Correction for one customized project."""

    project_name: str
    corrected_description: str
    parc_analysis: ParcAnalysis
    changes_made: list[str] = Field(default_factory=list)
    preserved_elements: list[str] = Field(default_factory=list)
    reasoning: str = ""


class ProjectsCorrectionSummary(BaseModel):
    total_projects_corrected: int = Field(ge=0)
    major_corrections: list[str] = Field(default_factory=list)
    confidence_score: float = Field(ge=0, le=10)


class ProjectsCorrection(BaseModel):
    """Corrections for every customized project, in input order."""

    corrected_projects: list[CorrectedProject] = Field(default_factory=list)
    correction_summary: ProjectsCorrectionSummary


class CorrectedProfileSection(BaseModel):
    profile: str
    changes_made: list[str] = Field(default_factory=list)
    reasoning: str = ""


class CorrectedCompetenciesSection(BaseModel):
    competencies: list[str] = Field(default_factory=list)
    removed_competencies: list[str] = Field(default_factory=list)
    reasoning: str = ""


class CorrectedProjectSection(BaseModel):
    project_name: str
    corrected_description: str
    parc_analysis: ParcAnalysis
    changes_made: list[str] = Field(default_factory=list)
    reasoning: str = ""


class CorrectionSummary(BaseModel):
    total_issues_fixed: int = Field(ge=0)
    major_changes: list[str] = Field(default_factory=list)
    quality_improvements: list[str] = Field(default_factory=list)
    confidence_score: float = Field(ge=0, le=10)


class CorrectionReport(BaseModel):
    """Combined result of the correction stages that ran."""

    corrected_profile: CorrectedProfileSection
    corrected_competencies: CorrectedCompetenciesSection
    corrected_projects: list[CorrectedProjectSection] = Field(default_factory=list)
    correction_summary: CorrectionSummary
