"""Evaluation of the customized CV against the customer requirements."""

import logging

from cv_customizer.agents.base import StageAgent
from cv_customizer.agents.errors import EvaluationFailed
from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.evaluation import Evaluation, RequirementCoverage
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.prompts.evaluation import build_evaluation_prompt

logger = logging.getLogger(__name__)


def align_coverage(
    coverage: list[RequirementCoverage], requirement_names: list[str]
) -> list[RequirementCoverage] | None:
    """Re-key coverage entries to the given requirement names.

    Entries are matched by exact name first, then case-insensitively, and any
    remaining entries fill the remaining requirements in order. Returns None
    when the counts differ.
    """
    if len(coverage) != len(requirement_names):
        return None

    assigned: list[RequirementCoverage | None] = [None] * len(requirement_names)
    unused = list(range(len(coverage)))

    for normalize in (lambda s: s, lambda s: s.strip().casefold()):
        for i, name in enumerate(requirement_names):
            if assigned[i] is not None:
                continue
            for j in unused:
                if normalize(coverage[j].requirement) == normalize(name):
                    assigned[i] = coverage[j]
                    unused.remove(j)
                    break

    leftovers = iter(unused)
    aligned = []
    for i, name in enumerate(requirement_names):
        entry = assigned[i] if assigned[i] is not None else coverage[next(leftovers)]
        aligned.append(entry.model_copy(update={"requirement": name}))
    return aligned


class CVEvaluator(StageAgent):
    """Score how well the customized CV covers each requirement."""

    failure = EvaluationFailed

    def evaluate(
        self,
        requirements: CustomerRequirements,
        profile: ProfileCustomization,
        competencies: KeyCompetencies,
        projects: list[ProjectCustomization],
        language: LanguageDetection | None = None,
    ) -> Evaluation:
        """Evaluate the customized content.

        Returns:
            Evaluation with exactly one coverage entry per requirement,
            must-have first, keyed by the requirement string.

        Raises:
            EvaluationFailed: If the call fails or the coverage does not
                line up with the requirements.
        """
        prompt = build_evaluation_prompt(requirements, profile, competencies, projects, language)
        evaluation = self._generate(prompt, Evaluation)

        names = [req.requirement for req in requirements.all_requirements()]
        aligned = align_coverage(evaluation.requirement_coverage, names)
        if aligned is None:
            raise self._contract_violation(
                f"coverage has {len(evaluation.requirement_coverage)} entries "
                f"for {len(names)} requirements"
            )
        evaluation = evaluation.model_copy(update={"requirement_coverage": aligned})

        logger.info(
            "CV evaluation completed: score %s/10, %d/%d requirements covered",
            evaluation.overall_score,
            evaluation.covered_count,
            len(names),
        )
        return evaluation
