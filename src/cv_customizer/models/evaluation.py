"""Evaluation of the customized CV against the requirements."""

from pydantic import BaseModel, Field


class RequirementCoverage(BaseModel):
    """How one requirement is covered by the customized CV."""

    requirement: str = Field(description="The requirement name, exactly as given")
    covered: bool
    coverage_details: str = ""
    improvement_suggestions: str = ""


class Evaluation(BaseModel):
    """Coverage per requirement plus an overall score."""

    requirement_coverage: list[RequirementCoverage] = Field(
        default_factory=list,
        description="One entry per requirement, in the order given",
    )
    overall_score: float = Field(ge=0, le=10, description="Overall match, 0-10")
    overall_comments: str = ""
    improvement_suggestions: list[str] = Field(default_factory=list)

    @property
    def covered_count(self) -> int:
        return sum(1 for c in self.requirement_coverage if c.covered)
