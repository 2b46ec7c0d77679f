"""Structured outputs of the customization stages."""

from pydantic import BaseModel, Field


class ProfileCustomization(BaseModel):
    """Original and tailored profile summary."""

    original_profile: str = Field(
        description="The complete, unmodified profile summary text from the CV"
    )
    customized_profile: str = Field(
        description="Tailored profile that preserves detail while emphasizing relevance"
    )
    reasoning: str = Field(description="What was changed and why")


class KeyCompetencies(BaseModel):
    """Competencies found in the CV and the subset relevant to the customer."""

    original_competencies: list[str] = Field(default_factory=list)
    relevant_competencies: list[str] = Field(default_factory=list)
    additional_suggested_competencies: list[str] = Field(default_factory=list)
    reasoning: str = ""


class ParcAnalysis(BaseModel):
    """Problem-Accountability-Role-Result breakdown of a project."""

    problem: str = Field(description="What was the challenge or situation")
    accountability: str = Field(description="What the consultant was responsible for")
    role: str = Field(description="The consultant's specific role")
    result: str = Field(description="Outcomes that were achieved")


class ProjectCustomization(BaseModel):
    """A project description tailored to the customer requirements."""

    project_name: str
    original_description: str
    customized_description: str = Field(
        description="Single flowing paragraph of 75-150 words following PARC"
    )
    relevance_score: float = Field(ge=0, le=10, description="Relevance to requirements, 0-10")
    parc_analysis: ParcAnalysis
    reasoning: str


class ProjectsCustomizationResponse(BaseModel):
    """Wrapper object; some providers reject a top-level array schema."""

    projects: list[ProjectCustomization] = Field(default_factory=list)
