"""Prompt for scoring the customized CV against the customer requirements."""

from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.prompts.base import (
    NONE_MARKER,
    StagePrompt,
    format_bullets,
    format_parc,
    format_requirements_detailed,
    render_system,
)

EVALUATION_SYSTEM = """You are an expert CV evaluator specializing in assessing how well a CV meets specific job requirements.
Your task is to evaluate the customized CV against the customer requirements.

{language_instruction}

Follow these steps:
1. Assess how well each customer requirement is covered in the customized CV
2. For each requirement, provide details on where and how it is covered
3. Suggest improvements for requirements that are not well covered
4. Provide an overall score (0-10) for how well the CV matches the requirements
5. Provide overall comments and improvement suggestions

Return exactly one requirement_coverage entry per requirement, in the order given, using the
requirement name exactly as written before the colon.

Be thorough but fair in your assessment. Focus on concrete evidence in the CV."""

EVALUATION_PROMPT = """Please evaluate the following customized CV against the customer requirements:

CUSTOMER REQUIREMENTS ({requirement_count}):
{requirements}

CUSTOMIZED PROFILE:
{profile}

KEY COMPETENCIES:
{competencies}

CUSTOMIZED PROJECTS:
{projects}

For each requirement, evaluate if it is covered in the CV, provide details on the coverage,
and suggest improvements if needed. Then provide an overall score and comments."""

PROJECT_SUMMARY = """PROJECT: {name}
RELEVANCE SCORE: {score}/10
CUSTOMIZED DESCRIPTION:
{description}
PARC ANALYSIS:
{parc}"""


def build_evaluation_prompt(
    requirements: CustomerRequirements,
    profile: ProfileCustomization,
    competencies: KeyCompetencies,
    projects: list[ProjectCustomization],
    language: LanguageDetection | None = None,
) -> StagePrompt:
    """Text-only prompt; the evaluation sees the customized content, not the CV."""
    projects_text = "\n\n".join(
        PROJECT_SUMMARY.format(
            name=project.project_name,
            score=f"{project.relevance_score:g}",
            description=project.customized_description,
            parc=format_parc(project),
        )
        for project in projects
    )
    text = EVALUATION_PROMPT.format(
        requirement_count=requirements.total_count,
        requirements=format_requirements_detailed(requirements),
        profile=profile.customized_profile,
        competencies=format_bullets(competencies.relevant_competencies),
        projects=projects_text or NONE_MARKER,
    )
    return StagePrompt(system=render_system(EVALUATION_SYSTEM, language), text=text)
