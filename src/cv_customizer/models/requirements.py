"""Customer requirement data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class RequirementCategory(str, Enum):
    """Kind of requirement extracted from customer documents."""

    SKILLS = "skills"
    EXPERIENCE = "experience"
    DOMAIN = "domain"
    EDUCATION = "education"
    CERTIFICATION = "certification"
    LANGUAGE = "language"
    SOFT_SKILLS = "soft_skills"
    OTHER = "other"


class RequirementPriority(str, Enum):
    """Priority assigned to a requirement."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def _normalize(value: str) -> str:
    return value.strip().lower().replace("-", "_").replace(" ", "_")


class Requirement(BaseModel):
    """A single customer requirement."""

    requirement: str = Field(description="Short name of the requirement")
    description: str = Field(description="What the customer expects")
    category: RequirementCategory = Field(
        default=RequirementCategory.OTHER,
        description="skills, experience, domain, education, certification, language, "
        "soft_skills or other",
    )
    priority: RequirementPriority = Field(
        default=RequirementPriority.MEDIUM,
        description="high, medium or low",
    )

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        """Map free-form categories from the model onto the known set."""
        if isinstance(v, RequirementCategory):
            return v
        if isinstance(v, str):
            normalized = _normalize(v)
            if normalized in RequirementCategory._value2member_map_:
                return normalized
        return RequirementCategory.OTHER

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> Any:
        """Accept 'High', 'HIGH' and similar spellings."""
        if isinstance(v, RequirementPriority):
            return v
        if isinstance(v, str):
            normalized = _normalize(v)
            if normalized in RequirementPriority._value2member_map_:
                return normalized
        return RequirementPriority.MEDIUM


class CustomerRequirements(BaseModel):
    """Requirements extracted from the customer documents."""

    must_have_requirements: list[Requirement] = Field(default_factory=list)
    should_have_requirements: list[Requirement] = Field(default_factory=list)
    context_summary: str = ""

    def all_requirements(self) -> list[Requirement]:
        """Must-have requirements followed by should-have requirements."""
        return [*self.must_have_requirements, *self.should_have_requirements]

    @property
    def total_count(self) -> int:
        return len(self.must_have_requirements) + len(self.should_have_requirements)
