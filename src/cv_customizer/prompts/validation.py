"""Prompt for fact-checking customized content against the original CV."""

from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.prompts.base import (
    NONE_MARKER,
    StagePrompt,
    format_bullets,
    format_parc,
    render_system,
)

CONTENT_VALIDATION_SYSTEM = """You are an expert fact-checker specializing in CV content validation.
Your critical task is to ensure that all customized CV content is FACTUALLY ACCURATE and GROUNDED in the original CV.

{language_instruction}

STRICT VALIDATION RULES:
1. NO FABRICATION: Never allow any information that is not present or directly supported by the original CV
2. NO EXAGGERATION: Don't allow overstated claims about skills, experience, or achievements
3. NO INVENTION: Don't allow new technologies, projects, or experiences not mentioned in the original CV
4. VERIFY EVERYTHING: Cross-check every claim in the customized content against the original CV
5. BE CONSERVATIVE: When in doubt, flag as potentially fabricated
6. QUOTE EXACTLY: When identifying fabricated or unsupported claims, provide the EXACT text from the customized content
7. DISTINGUISH REORGANIZATION FROM FABRICATION: Reorganizing or rephrasing existing information is acceptable; adding new information is not

VALIDATION PROCESS:
1. Read through the ENTIRE original CV document to establish the factual baseline
2. Compare the customized content with ALL content in the original CV
3. Only flag as fabricated/unsupported if the information is definitively NOT present in the original CV
4. Allow reasonable interpretation and rephrasing of existing information
5. Focus on substance, not style or presentation changes

OUTPUT REQUIREMENTS:
- Return one projects_validation entry per customized project, in the order given, using the project name exactly as given
- corrected_profile: Only provide if corrections are needed, otherwise use empty string ""
- corrected_description: Only provide if corrections are needed, otherwise use empty string ""
- If no fabricated content is found, clearly state this in your reasoning

Your validation should be thorough but fair - don't penalize good customization that stays within factual bounds."""

CONTENT_VALIDATION_PROMPT = """Please validate the following customized CV content against the original CV to ensure no fabrication or unsupported claims:

ORIGINAL PROFILE:
{original_profile}

CUSTOMIZED PROFILE:
{customized_profile}

ORIGINAL COMPETENCIES:
{original_competencies}

RELEVANT CUSTOMIZED COMPETENCIES:
{customized_competencies}

CUSTOMIZED PROJECTS:
{projects}

VALIDATION INSTRUCTIONS:
1. Read through the ENTIRE attached CV document to understand all available information
2. Compare each piece of customized content against the complete original CV
3. The original profile above was extracted from the CV, so check against the full PDF document
4. Only flag content as fabricated if you cannot find supporting information anywhere in the original CV
5. Provide corrected versions only if actual fabrication is found"""

PROJECT_BLOCK = """PROJECT: {name}
ORIGINAL DESCRIPTION: {original}
CUSTOMIZED DESCRIPTION: {customized}
PARC ANALYSIS:
{parc}"""


def build_content_validation_prompt(
    cv: SourceDocument,
    profile: ProfileCustomization,
    competencies: KeyCompetencies,
    projects: list[ProjectCustomization],
    language: LanguageDetection | None = None,
) -> StagePrompt:
    projects_text = "\n\n".join(
        PROJECT_BLOCK.format(
            name=project.project_name,
            original=project.original_description,
            customized=project.customized_description,
            parc=format_parc(project),
        )
        for project in projects
    )
    text = CONTENT_VALIDATION_PROMPT.format(
        original_profile=profile.original_profile,
        customized_profile=profile.customized_profile,
        original_competencies=format_bullets(competencies.original_competencies),
        customized_competencies=format_bullets(competencies.relevant_competencies),
        projects=projects_text or NONE_MARKER,
    )
    return StagePrompt(
        system=render_system(CONTENT_VALIDATION_SYSTEM, language),
        text=text,
        documents=(cv,),
    )
