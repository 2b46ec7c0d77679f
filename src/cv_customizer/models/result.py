"""Final aggregate result of a customization run."""

from pydantic import BaseModel, Field

from cv_customizer.models.correction import CorrectionReport
from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.evaluation import Evaluation
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.validation import ContentValidation


class CustomizationResult(BaseModel):
    """Payload delivered with the `complete` progress step."""

    customer_requirements: CustomerRequirements
    profile_customization: ProfileCustomization
    key_competencies: KeyCompetencies
    customized_projects: list[ProjectCustomization] = Field(default_factory=list)
    evaluation: Evaluation
    validation: ContentValidation
    language_code: str = "en"
    correction: CorrectionReport | None = None
