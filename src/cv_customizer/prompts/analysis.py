"""Prompts for language detection and customer requirements analysis."""

from collections.abc import Sequence

from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.prompts.base import StagePrompt, render_system

LANGUAGE_DETECTION_SYSTEM = (
    "You are a language detection specialist. "
    "Analyze the document and identify the primary language used."
)

LANGUAGE_DETECTION_PROMPT = (
    "What language is this document written in? "
    "Provide the language name, ISO code, and your confidence level."
)


REQUIREMENTS_ANALYSIS_SYSTEM = """You are an expert CV analyst specializing in analyzing job requirements and customer specifications.
Your task is to analyze the provided customer documents and extract all requirements.

{language_instruction}

Follow these steps:
1. Identify all requirements in the customer documents
2. Categorize them as "must have" (essential) or "should have" (desired but not essential)
3. For each requirement, provide a brief description
4. Assign a category (skills, experience, domain, education, certification, language, soft_skills, other)
5. Assign a priority level (high, medium, low) to each requirement
6. Provide a brief context summary of the customer and project

Be thorough but concise. Focus on technical skills, domain knowledge, experience levels,
and any specific qualifications mentioned."""

REQUIREMENTS_ANALYSIS_PROMPT = (
    "Please analyze these customer documents and extract all requirements:"
)


def build_language_detection_prompt(cv: SourceDocument) -> StagePrompt:
    return StagePrompt(
        system=LANGUAGE_DETECTION_SYSTEM,
        text=LANGUAGE_DETECTION_PROMPT,
        documents=(cv,),
    )


def build_requirements_analysis_prompt(
    requirement_docs: Sequence[SourceDocument],
    language: LanguageDetection | None = None,
) -> StagePrompt:
    """Attach every customer document, in upload order, to one request."""
    return StagePrompt(
        system=render_system(REQUIREMENTS_ANALYSIS_SYSTEM, language),
        text=REQUIREMENTS_ANALYSIS_PROMPT,
        documents=tuple(requirement_docs),
    )
