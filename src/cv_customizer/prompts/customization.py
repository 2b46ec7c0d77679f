"""Prompts for tailoring the profile, competencies and projects of a CV."""

from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements, Requirement
from cv_customizer.prompts.base import (
    NONE_MARKER,
    StagePrompt,
    format_requirements_detailed,
    render_system,
)

PROFILE_CUSTOMIZATION_SYSTEM = """You are an expert CV writer specializing in tailoring professional profiles to specific job requirements.
Your task is to extract the complete original profile summary section and create a customized version that better matches customer requirements.

{language_instruction}

Follow these steps:
1. EXTRACT THE COMPLETE ORIGINAL PROFILE: Find and extract the ENTIRE personal profile/summary section from the CV exactly as written - do not abbreviate, summarize, or modify it in any way
2. Analyze the customer requirements to understand what should be emphasized
3. CREATE A COMPREHENSIVE CUSTOMIZED VERSION: Write a new profile that:
   - Maintains substantial detail from the original profile
   - Emphasizes relevant skills and experiences that match customer requirements
   - Preserves important background information and specific details
   - Reorganizes content to highlight the most relevant aspects first
   - Is comprehensive (similar length to original or slightly shorter, but NOT drastically shortened)
4. Ensure the customized profile highlights how the candidate meets the must-have requirements
5. Include relevant soft skills that would be valuable for the role
6. Keep the professional tone and style consistent with the original
7. Explain your reasoning for the changes

CRITICAL INSTRUCTIONS:
- original_profile: Must contain the COMPLETE, UNMODIFIED original profile text from the CV
- customized_profile: A comprehensive, tailored version that preserves important details while emphasizing relevance
- reasoning: Explain what changes you made and why

Do NOT create a short summary or drastically reduce the content. Only remove or de-emphasize content that is clearly irrelevant to the customer's needs."""

PROFILE_CUSTOMIZATION_PROMPT = """Here are the customer requirements:

CONTEXT SUMMARY:
{context_summary}

MUST-HAVE REQUIREMENTS:
{must_have}

SHOULD-HAVE REQUIREMENTS:
{should_have}

INSTRUCTIONS:
1. Extract the COMPLETE original profile/summary section from the attached CV exactly as written (do not shorten or modify it)
2. Create a customized version that better aligns with these customer requirements
3. Provide detailed reasoning for your changes

CRITICAL: The original_profile field must contain the ENTIRE original profile summary text from the CV, word-for-word, without any modifications, abbreviations, or summarization."""


COMPETENCIES_CUSTOMIZATION_SYSTEM = """You are an expert CV consultant specializing in tailoring professional competencies to match job requirements.
Your task is to identify and prioritize competencies in a CV based on customer requirements.

{language_instruction}

Follow these steps:
1. Extract all competencies/skills mentioned in the CV
2. Identify which of these competencies are most relevant to the customer requirements
3. Suggest additional competencies that should be highlighted based on the CV content and requirements
4. Provide reasoning for your selections

Focus on both technical skills and domain knowledge that align with the customer's needs."""

COMPETENCIES_CUSTOMIZATION_PROMPT = """Here are the customer requirements:

CONTEXT SUMMARY:
{context_summary}

REQUIREMENTS:
{requirements}

Please analyze the attached CV. Extract all competencies from it, identify which ones are most relevant to the
customer requirements, and suggest any additional competencies that should be highlighted
based on the CV content. Provide your reasoning for the selections."""


PROJECTS_CUSTOMIZATION_SYSTEM = """You are an expert CV consultant specializing in tailoring project descriptions to match job requirements.
Your task is to extract projects from the CV and customize their descriptions to highlight experiences relevant to the customer requirements.

{language_instruction}

Follow these steps:
1. Identify key projects/assignments from the CV
2. For each identified project, extract its original description
3. Customize each project description to highlight aspects relevant to the customer requirements

Write project descriptions in natural, flowing narrative language that incorporates the PARC method:
- Problem: What was the challenge or situation?
- Accountability: What responsibilities did the consultant have?
- Role: What was the consultant's specific role?
- Result: What outcomes were achieved?

Do NOT write the description as a list or separate sections. Craft one narrative paragraph that moves
from situation to action to results.

Example style: "Led the digital transformation initiative for a legacy banking system facing critical performance issues and regulatory compliance gaps. Took full accountability for architecting and implementing a modern microservices solution, coordinating cross-functional teams of 12 developers and business analysts. Delivered a scalable platform that improved transaction processing speed by 65% and achieved full regulatory compliance, resulting in $2.3M annual cost savings."

When customizing project descriptions:
1. Highlight aspects that align with customer requirements
2. Use action-oriented language and strong verbs
3. Quantify achievements only with numbers from the original CV
4. Focus on the consultant's personal contribution and impact
5. Ensure the customized description accurately reflects the original project
6. Provide a relevance score (0-10) for each project based on how well it matches the requirements
7. Write in third-person objective form (avoid "I" statements)
8. Keep descriptions between 75-150 words as a single paragraph

Return at least 3-5 most relevant projects, sorted by relevance to the customer requirements."""

PROJECTS_CUSTOMIZATION_PROMPT = """Please analyze the attached CV and extract key projects. Then customize each project description to better match these customer requirements:

CONTEXT SUMMARY:
{context_summary}

REQUIREMENTS:
{requirements}

For each project:
1. Extract the original description
2. Create a customized version that highlights aspects relevant to the requirements
3. Use the PARC method (Problem, Accountability, Role, Result)
4. Rate the relevance of each project to the requirements (0-10)
5. Provide reasoning for your customization

Return the projects sorted by relevance score (highest first)."""


def _requirement_lines(requirements: list[Requirement]) -> str:
    lines = [
        f"- {req.requirement}: {req.description} (Priority: {req.priority.value})"
        for req in requirements
    ]
    return "\n".join(lines) if lines else NONE_MARKER


def build_profile_customization_prompt(
    cv: SourceDocument,
    requirements: CustomerRequirements,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    text = PROFILE_CUSTOMIZATION_PROMPT.format(
        context_summary=requirements.context_summary,
        must_have=_requirement_lines(requirements.must_have_requirements),
        should_have=_requirement_lines(requirements.should_have_requirements),
    )
    return StagePrompt(
        system=render_system(PROFILE_CUSTOMIZATION_SYSTEM, language),
        text=text,
        documents=(cv,),
    )


def build_competencies_customization_prompt(
    cv: SourceDocument,
    requirements: CustomerRequirements,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    lines = [
        f"- {req.requirement} (Must-have, Priority: {req.priority.value})"
        for req in requirements.must_have_requirements
    ] + [
        f"- {req.requirement} (Should-have, Priority: {req.priority.value})"
        for req in requirements.should_have_requirements
    ]
    text = COMPETENCIES_CUSTOMIZATION_PROMPT.format(
        context_summary=requirements.context_summary,
        requirements="\n".join(lines) if lines else NONE_MARKER,
    )
    return StagePrompt(
        system=render_system(COMPETENCIES_CUSTOMIZATION_SYSTEM, language),
        text=text,
        documents=(cv,),
    )


def build_projects_customization_prompt(
    cv: SourceDocument,
    requirements: CustomerRequirements,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    text = PROJECTS_CUSTOMIZATION_PROMPT.format(
        context_summary=requirements.context_summary,
        requirements=format_requirements_detailed(requirements),
    )
    return StagePrompt(
        system=render_system(PROJECTS_CUSTOMIZATION_SYSTEM, language),
        text=text,
        documents=(cv,),
    )
