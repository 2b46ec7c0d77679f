"""Markdown and JSON output formatting."""

from pathlib import Path

from pydantic import BaseModel

from cv_customizer.models.evaluation import Evaluation
from cv_customizer.models.quality import (
    CRITERION_NAMES,
    CompetenceVerification,
    ContentCompleteness,
    CVAnalysis,
    ProjectDescriptions,
    SummaryQuality,
)
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.result import CustomizationResult
from cv_customizer.models.state import CustomizationState


def save_markdown(content: str, output_path: str | Path) -> Path:
    """Save content to a markdown file.

    Args:
        content: Markdown content to save.
        output_path: Path to save the file.

    Returns:
        Path to the saved file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def save_json(result: BaseModel, output_path: str | Path) -> Path:
    """Save the result in its wire form."""
    return save_markdown(result.model_dump_json(indent=2), output_path)


def format_requirements(requirements: CustomerRequirements) -> str:
    output = ["## Customer Requirements", ""]
    if requirements.context_summary:
        output.append(requirements.context_summary)
        output.append("")

    for title, items in (
        ("Must-have", requirements.must_have_requirements),
        ("Should-have", requirements.should_have_requirements),
    ):
        output.append(f"### {title}")
        if not items:
            output.append("- None")
        for req in items:
            output.append(
                f"- **{req.requirement}** ({req.category.value}, {req.priority.value}): "
                f"{req.description}"
            )
        output.append("")
    return "\n".join(output).rstrip()


def format_evaluation(evaluation: Evaluation) -> str:
    """Format the evaluation with a coverage line per requirement."""
    output = [f"## Evaluation (Score: {evaluation.overall_score:g}/10)", ""]
    if evaluation.overall_comments:
        output.append(evaluation.overall_comments)
        output.append("")

    output.append("### Requirement Coverage")
    for coverage in evaluation.requirement_coverage:
        mark = "x" if coverage.covered else " "
        line = f"- [{mark}] **{coverage.requirement}**"
        if coverage.coverage_details:
            line += f": {coverage.coverage_details}"
        output.append(line)
        if not coverage.covered and coverage.improvement_suggestions:
            output.append(f"  - Suggestion: {coverage.improvement_suggestions}")
    output.append("")

    if evaluation.improvement_suggestions:
        output.append("### Improvement Suggestions")
        for suggestion in evaluation.improvement_suggestions:
            output.append(f"- {suggestion}")
    return "\n".join(output).rstrip()


def format_customization_result(result: CustomizationResult) -> str:
    """Format the complete customization result as a Markdown document."""
    output = ["# Customized CV", ""]

    output.append("## Profile")
    output.append(result.profile_customization.customized_profile)
    output.append("")

    output.append("## Key Competencies")
    for competency in result.key_competencies.relevant_competencies:
        output.append(f"- {competency}")
    if result.key_competencies.additional_suggested_competencies:
        output.append("")
        suggested = ", ".join(result.key_competencies.additional_suggested_competencies)
        output.append(f"*Suggested additions:* {suggested}")
    output.append("")

    output.append("## Projects")
    for project in result.customized_projects:
        output.append(f"### {project.project_name} (relevance {project.relevance_score:g}/10)")
        output.append(project.customized_description)
        output.append("")

    output.append("---")
    output.append("")
    output.append(format_evaluation(result.evaluation))
    output.append("")

    overall = result.validation.overall_validation
    verdict = "Passed" if overall.passes_validation else "Failed"
    output.append(f"## Fact Check: {verdict} (confidence {overall.confidence_score:g}/10)")
    if overall.summary:
        output.append(overall.summary)
    output.append("")

    if result.correction is not None:
        summary = result.correction.correction_summary
        output.append(
            f"## Corrections ({summary.total_issues_fixed} issues fixed, "
            f"confidence {summary.confidence_score:g}/10)"
        )
        for change in summary.major_changes:
            output.append(f"- {change}")
        output.append("")

    output.append(format_requirements(result.customer_requirements))
    return "\n".join(output).rstrip() + "\n"


def format_result(state: CustomizationState) -> str:
    """Format the final workflow state for display.

    Args:
        state: Final workflow state.

    Returns:
        Formatted result string.
    """
    if state.get("errors"):
        return "Errors occurred:\n" + "\n".join(f"- {e}" for e in state["errors"])
    if state.get("result") is None:
        return "No result was produced."
    return format_customization_result(state["result"])


def format_cv_analysis(analysis: CVAnalysis) -> str:
    """Format a CV quality analysis as a Markdown document."""
    output = [f"# CV Analysis (Score: {analysis.overall_score:.1f}/10)", ""]
    if analysis.summary:
        output.append(analysis.summary)
        output.append("")

    for title, items in (
        ("Key Strengths", analysis.key_strengths),
        ("Key Improvement Areas", analysis.key_improvement_areas),
    ):
        output.append(f"## {title}")
        output.extend(f"- {item}" for item in items)
        output.append("")

    for criterion, rating in analysis.ratings():
        output.append(f"## {CRITERION_NAMES[criterion]} ({rating.score:.1f}/10)")
        if rating.reasoning:
            output.append(rating.reasoning)
            output.append("")
        if rating.suggestions:
            output.append("**Suggestions:**")
            output.extend(f"- {suggestion}" for suggestion in rating.suggestions)
            output.append("")

        if isinstance(rating, ContentCompleteness) and rating.element_verification:
            for check in rating.element_verification:
                mark = "x" if check.present else " "
                line = f"- [{mark}] {check.element}"
                if check.comment:
                    line += f": {check.comment}"
                output.append(line)
            output.append("")
        if isinstance(rating, ProjectDescriptions):
            for project in rating.project_evaluations:
                output.append(f"### {project.project_name} ({project.score:.1f}/10)")
                output.extend(f"- Strength: {s}" for s in project.strengths)
                output.extend(f"- Weakness: {w}" for w in project.weaknesses)
                if project.improved_version:
                    output.append("")
                    output.append(f"*Improved:* {project.improved_version}")
                output.append("")
        if isinstance(rating, CompetenceVerification):
            for label, items in (
                ("Unverified competencies", rating.unverified_competencies),
                ("Unverified roles", rating.unverified_roles),
            ):
                if items:
                    output.append(f"*{label}:* {', '.join(items)}")
                    output.append("")
        if isinstance(rating, SummaryQuality) and rating.original_summary:
            output.append("**Original summary:**")
            output.append(rating.original_summary)
            output.append("")
        if rating.improved_version and not isinstance(rating, ProjectDescriptions):
            output.append("**Improved version:**")
            output.append(rating.improved_version)
            output.append("")

    return "\n".join(output).rstrip() + "\n"
