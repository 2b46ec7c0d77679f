"""Prompts for correcting content flagged by the fact check."""

from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.validation import (
    CompetenciesValidation,
    ProfileValidation,
    ProjectValidation,
)
from cv_customizer.prompts.base import (
    StagePrompt,
    format_bullets,
    format_findings,
    format_parc,
    format_requirements_by_category,
    pair_project_findings,
    render_system,
)

PROFILE_CORRECTION_SYSTEM = """You are an expert CV profile correction specialist. Your task is to fix only the specific validation issues identified while preserving valuable customizations that are factually accurate.

{language_instruction}

CORRECTION PRINCIPLES:
1. VERIFY VALIDATION ACCURACY: First, re-examine the original CV to confirm if the flagged issues are actually problems
2. TARGETED FIXES: Only fix issues that are genuinely fabricated or unsupported by the original CV
3. PRESERVE CUSTOMIZATIONS: Keep all valid customizations that improve relevance to customer requirements
4. MAINTAIN OPTIMIZATION: The corrected profile should still be optimized for the customer requirements
5. FACTUAL ACCURACY: Ensure all information is grounded in the original CV
6. BALANCED APPROACH: Don't revert to the original - improve the customized version
7. QUESTION FALSE POSITIVES: If validation flagged something that IS in the original CV, preserve it

Validation can incorrectly flag reorganized or rephrased content as fabricated.
Make the final determination based on what is actually in the original CV."""

PROFILE_CORRECTION_PROMPT = """Please correct the specific validation issues in the customized profile while preserving valid customizations.

VALIDATION ISSUES TO FIX:
{findings}

CUSTOMER REQUIREMENTS TO MAINTAIN RELEVANCE:
{requirements}

ORIGINAL PROFILE:
{original_profile}

CUSTOMIZED PROFILE (to be corrected):
{customized_profile}

INSTRUCTIONS:
1. Fix only the specific fabricated or unsupported claims identified
2. Preserve all valid customizations that improve relevance to customer requirements
3. Maintain the enhanced presentation style from the customized version
4. Do NOT simply revert to the original profile"""


COMPETENCIES_CORRECTION_SYSTEM = """You are an expert CV competencies correction specialist. Your task is to fix competency validation issues while preserving relevant selections.

{language_instruction}

CORRECTION PRINCIPLES:
1. REMOVE FABRICATED: Remove only competencies that are not supported by the original CV
2. PRESERVE RELEVANT: Keep all competencies that are both in the original CV and relevant to customer requirements
3. MAINTAIN OPTIMIZATION: Ensure the final list is still optimized for customer requirements
4. FACTUAL GROUNDING: Only include competencies that are clearly demonstrated in the original CV"""

COMPETENCIES_CORRECTION_PROMPT = """Please correct the competencies list by removing only the unsupported ones while preserving valid selections.

VALIDATION ISSUES TO FIX:
{findings}

CUSTOMER REQUIREMENTS:
{requirements}

ORIGINAL COMPETENCIES (available in CV):
{original_competencies}

CURRENT CUSTOMIZED COMPETENCIES (to be corrected):
{customized_competencies}

INSTRUCTIONS:
1. Remove only the competencies identified as unsupported by the validation
2. Keep all competencies that are both in the original CV and relevant to customer requirements
3. List every removed competency in removed_competencies"""


PROJECTS_CORRECTION_SYSTEM = """You are an expert CV projects correction specialist. Your task is to fix project validation issues while preserving valuable customizations.

{language_instruction}

CORRECTION PRINCIPLES:
1. TARGETED FIXES: Only fix the specific fabricated or unsupported claims identified
2. PRESERVE CUSTOMIZATIONS: Keep all valid improvements in presentation and relevance
3. MAINTAIN PARC STRUCTURE: Preserve the Problem-Accountability-Role-Result analysis where factual
4. FACTUAL GROUNDING: Ensure all details are supported by the original CV
5. OPTIMIZE FOR REQUIREMENTS: Keep customizations that improve relevance to customer requirements

You must return corrections for ALL {project_count} projects, in the order given, using each project name exactly as given."""

PROJECTS_CORRECTION_PROMPT = """Please correct validation issues in ALL {project_count} project descriptions while preserving valid customizations.

CUSTOMER REQUIREMENTS:
{requirements}

PROJECTS TO CORRECT:
{projects}

INSTRUCTIONS:
1. Provide corrections for ALL {project_count} projects in the same order
2. Fix only the specific fabricated or unsupported claims identified for each project
3. Preserve all valid customizations that improve relevance to customer requirements
4. Maintain the enhanced presentation style and PARC structure where factual
5. Ensure each corrected description is grounded in the original project description"""

PROJECT_FINDINGS_BLOCK = """PROJECT {number}: {name}
ORIGINAL DESCRIPTION: {original}
CUSTOMIZED DESCRIPTION: {customized}
PARC ANALYSIS:
{parc}
VALIDATION ISSUES:
{findings}"""


def format_profile_findings(validation: ProfileValidation) -> str:
    return "\n".join(
        [
            f"- Factually Accurate: {validation.is_factually_accurate}",
            f"- Fabricated Claims: {format_findings(validation.fabricated_claims)}",
            f"- Unsupported Claims: {format_findings(validation.unsupported_claims)}",
            f"- Validation Reasoning: {validation.reasoning}",
        ]
    )


def format_project_findings(validation: ProjectValidation) -> str:
    return "\n".join(
        [
            f"- Factually Accurate: {validation.is_factually_accurate}",
            f"- Fabricated Details: {format_findings(validation.fabricated_details)}",
            f"- Unsupported Claims: {format_findings(validation.unsupported_claims)}",
            f"- Reasoning: {validation.reasoning}",
        ]
    )


def build_profile_correction_prompt(
    cv: SourceDocument,
    profile: ProfileCustomization,
    validation: ProfileValidation,
    requirements: CustomerRequirements,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    text = PROFILE_CORRECTION_PROMPT.format(
        findings=format_profile_findings(validation),
        requirements=format_requirements_by_category(requirements),
        original_profile=profile.original_profile,
        customized_profile=profile.customized_profile,
    )
    return StagePrompt(
        system=render_system(PROFILE_CORRECTION_SYSTEM, language),
        text=text,
        documents=(cv,),
    )


def build_competencies_correction_prompt(
    cv: SourceDocument,
    competencies: KeyCompetencies,
    validation: CompetenciesValidation,
    requirements: CustomerRequirements,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    findings = "\n".join(
        [
            f"- Unsupported Competencies: {format_findings(validation.unsupported_competencies)}",
            f"- Validation Reasoning: {validation.reasoning}",
        ]
    )
    text = COMPETENCIES_CORRECTION_PROMPT.format(
        findings=findings,
        requirements=format_requirements_by_category(requirements),
        original_competencies=format_bullets(competencies.original_competencies),
        customized_competencies=format_bullets(competencies.relevant_competencies),
    )
    return StagePrompt(
        system=render_system(COMPETENCIES_CORRECTION_SYSTEM, language),
        text=text,
        documents=(cv,),
    )


def build_projects_correction_prompt(
    cv: SourceDocument,
    projects: list[ProjectCustomization],
    findings: list[ProjectValidation],
    requirements: CustomerRequirements,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    """Every customized project is listed with its paired finding, in input order."""
    blocks = [
        PROJECT_FINDINGS_BLOCK.format(
            number=number,
            name=project.project_name,
            original=project.original_description,
            customized=project.customized_description,
            parc=format_parc(project),
            findings=format_project_findings(finding),
        )
        for number, (project, finding) in enumerate(
            pair_project_findings(projects, findings), start=1
        )
    ]
    text = PROJECTS_CORRECTION_PROMPT.format(
        project_count=len(projects),
        requirements=format_requirements_by_category(requirements),
        projects="\n\n".join(blocks),
    )
    return StagePrompt(
        system=render_system(PROJECTS_CORRECTION_SYSTEM, language, project_count=len(projects)),
        text=text,
        documents=(cv,),
    )
