"""Prompts for the CV quality analysis."""

import json

from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.quality import CRITERION_NAMES, Criterion, CriterionRating
from cv_customizer.prompts.base import StagePrompt, render_system

NUANCED_SCORING = """Be nuanced in your scoring, using the full range from 0-10 rather than just a few discrete values.
For example, use scores like 3.5, 5.7, 8.2 to precisely reflect the quality level."""

LANGUAGE_QUALITY_SYSTEM = """You are an expert language quality evaluator for CVs.
Analyze the CV's language quality including:
- Grammar and spelling correctness
- Professional tone and language
- Use of third-person perspective
- Action-oriented language and good flow
- Conciseness and clarity

Rate on a scale from 0-10 where:
0-3: Poor quality with many issues
4-6: Average quality with some issues
7-10: Good to excellent quality with minimal or no issues

{scoring}

Provide detailed reasoning for your rating and specific suggestions for improvement.
Where applicable, provide an improved version of problematic text.

{language_instruction}"""

CONTENT_COMPLETENESS_SYSTEM = """You are an expert CV structure and content evaluator.
Analyze the CV's completeness and verify it contains all standard elements:
- Summary/Profile
- Projects/Experience
- Technology/Technical Skills
- Competencies/Skills
- Roles
- Education
- Courses/Training
- Certifications
- Languages

Rate on a scale from 0-10 where:
0-3: Many required elements missing
4-6: Some elements missing or incomplete
7-10: Most or all elements present with varying degrees of completeness

{scoring}

Provide detailed reasoning for your rating, specific suggestions for improvement,
and a verification table of all elements indicating whether each is present.

{language_instruction}"""

SUMMARY_QUALITY_SYSTEM = """You are an expert CV summary evaluator.
Analyze the CV's summary/profile section based on these criteria:
- Strong opening that clearly describes the person's profession and experience level
- Inclusion of key skills and experiences relevant to their field
- Demonstration of value using concrete examples where possible
- Overall impact and clarity

Rate on a scale from 0-10 where:
0-3: Poor summary lacking key elements and impact
4-6: Average summary with some strengths but room for improvement
7-10: Good to excellent summary that effectively showcases the candidate

{scoring}

First, extract and include the exact original summary text from the CV.
Then, provide detailed reasoning for your rating, specific suggestions for improvement,
and create an improved version of the summary that maintains the person's experience
and skills but enhances the presentation.

Use these guidelines for summary evaluation:
{checklist}

{language_instruction}"""

PROJECT_DESCRIPTIONS_SYSTEM = """You are an expert CV project descriptions evaluator.
Analyze each project/experience description based on these criteria:
- Proper structure with clear beginning and end
- Action-oriented language focusing on deliverables, impact, and results
- Clear indication of responsibility and role
- Demonstration of value contribution
- Following the PARK methodology:
  * Problem statement
  * Areas of responsibility
  * Results achieved
  * Knowledge/competencies utilized

Rate each project on a scale from 0-10 where:
0-3: Poor description lacking most elements
4-6: Average description with some strengths but room for improvement
7-10: Good to excellent description that effectively showcases the experience

{scoring}

Provide an overall rating, detailed reasoning, specific suggestions for improvement,
and individual evaluations for each project including strengths and weaknesses.
For the most problematic project descriptions, provide improved versions.

Use these guidelines for project description evaluation:
{checklist}

{language_instruction}"""

COMPETENCE_VERIFICATION_SYSTEM = """You are an expert CV competence verification specialist.
Your task is to verify consistency between listed competencies/roles and project descriptions.

Specifically:
- For all competencies listed in the CV, verify they are demonstrated in at least one project
- For all roles listed in the CV, verify they are described in at least one project

Rate on a scale from 0-10 where:
0-3: Many competencies/roles not verified in projects
4-6: Some competencies/roles not verified in projects
7-10: Most or all competencies/roles properly verified in projects

{scoring}

Provide detailed reasoning for your rating, specific suggestions for improvement,
and lists of any unverified competencies and roles.

{language_instruction}"""

CRITERION_PROMPTS: dict[Criterion, tuple[str, str]] = {
    Criterion.LANGUAGE_QUALITY: (
        LANGUAGE_QUALITY_SYSTEM,
        "Please evaluate the language quality of this CV. Focus on grammar, spelling, flow, "
        "professional tone, third-person perspective, and action-oriented language.",
    ),
    Criterion.CONTENT_COMPLETENESS: (
        CONTENT_COMPLETENESS_SYSTEM,
        "Please evaluate the content completeness of this CV. Check if it contains all "
        "standard elements and identify any missing components.",
    ),
    Criterion.SUMMARY_QUALITY: (
        SUMMARY_QUALITY_SYSTEM,
        "Please evaluate the summary/profile section of this CV and create an improved version.",
    ),
    Criterion.PROJECT_DESCRIPTIONS: (
        PROJECT_DESCRIPTIONS_SYSTEM,
        "Please evaluate all project/experience descriptions in this CV. Analyze their "
        "structure, language, and effectiveness.",
    ),
    Criterion.COMPETENCE_VERIFICATION: (
        COMPETENCE_VERIFICATION_SYSTEM,
        "Please verify the consistency between competencies/roles and project descriptions in "
        "this CV. Identify any competencies or roles that are not properly demonstrated in the "
        "projects.",
    ),
}

ANALYSIS_SUMMARY_SYSTEM = """You are a CV evaluation coordinator summarizing detailed analysis results.
Create a concise, professional summary of the CV evaluation that highlights:
1. The overall quality level (based on score of {overall_score:.1f} out of 10)
2. Key strengths identified
3. Priority areas for improvement
4. Most important action steps

Keep your summary concise and actionable. Focus on the most important findings.

{language_instruction}"""

ANALYSIS_SUMMARY_PROMPT = """Synthesize these CV evaluation results into a concise summary with key actions:
{ratings}"""


def build_criterion_prompt(
    criterion: Criterion,
    cv: SourceDocument,
    language: LanguageDetection | None = None,
    checklist: str = "",
) -> StagePrompt:
    """The CV is attached; summary and project criteria also get their checklist."""
    system, text = CRITERION_PROMPTS[criterion]
    return StagePrompt(
        system=render_system(
            system, language, scoring=NUANCED_SCORING, checklist=checklist
        ),
        text=text,
        documents=(cv,),
    )


def build_analysis_summary_prompt(
    ratings: list[tuple[Criterion, CriterionRating]],
    overall_score: float,
    language: LanguageDetection | None = None,
) -> StagePrompt:
    payload = [
        {
            "criterion_id": criterion.value,
            "criterion_name": CRITERION_NAMES[criterion],
            **rating.model_dump(exclude_none=True),
        }
        for criterion, rating in ratings
    ]
    return StagePrompt(
        system=render_system(ANALYSIS_SUMMARY_SYSTEM, language, overall_score=overall_score),
        text=ANALYSIS_SUMMARY_PROMPT.format(
            ratings=json.dumps(payload, indent=2, ensure_ascii=False)
        ),
    )
