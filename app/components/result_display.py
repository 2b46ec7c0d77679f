"""Result display component for Streamlit UI."""

import re

import streamlit as st

from cv_customizer.models.result import CustomizationResult
from cv_customizer.output.markdown import format_customization_result, format_requirements


def markdown_to_plain_text(content: str) -> str:
    """Strip the Markdown markup used by the result document."""
    plain_text = re.sub(r"^#{1,6}\s+", "", content, flags=re.MULTILINE)  # Headers
    plain_text = re.sub(r"\*\*([^*]+)\*\*", r"\1", plain_text)  # Bold
    plain_text = re.sub(r"\*([^*]+)\*", r"\1", plain_text)  # Italic
    plain_text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", plain_text)  # Links
    return plain_text


def score_color(score: float) -> str:
    if score >= 7:
        return "#28a745"
    if score >= 5:
        return "#ffc107"
    return "#dc3545"


def render_result(result: CustomizationResult) -> None:
    """Render the customization result.

    Args:
        result: The payload of the completed run.
    """
    st.divider()

    _render_score_card(result)

    tab_cv, tab_eval, tab_check, tab_fix, tab_req = st.tabs(
        ["Customized CV", "Evaluation", "Fact Check", "Corrections", "Requirements"]
    )
    with tab_cv:
        render_customized_cv(result)
    with tab_eval:
        render_evaluation(result)
    with tab_check:
        render_validation(result)
    with tab_fix:
        render_corrections(result)
    with tab_req:
        st.markdown(format_requirements(result.customer_requirements))


def _render_score_card(result: CustomizationResult) -> None:
    evaluation = result.evaluation
    col_score, col_coverage, col_check = st.columns(3)

    with col_score:
        st.markdown(
            f"""
            <span style="font-size: 0.9rem; color: #666;">Overall Score</span>
            <div style="font-size: 2.5rem; font-weight: bold;
                        color: {score_color(evaluation.overall_score)};">
                {evaluation.overall_score:g}/10
            </div>
            """,
            unsafe_allow_html=True,
        )
    with col_coverage:
        st.metric(
            "Requirements Covered",
            f"{evaluation.covered_count}/{len(evaluation.requirement_coverage)}",
        )
    with col_check:
        if result.correction is not None:
            fixed = result.correction.correction_summary.total_issues_fixed
            st.metric("Issues Fixed", fixed)
        else:
            st.metric("Fact Check", "Passed")


def render_customized_cv(result: CustomizationResult) -> None:
    """Render the customized content with export options."""
    st.subheader("Profile")
    st.markdown(result.profile_customization.customized_profile)

    st.subheader("Key Competencies")
    if result.key_competencies.relevant_competencies:
        st.markdown(
            "\n".join(f"- {item}" for item in result.key_competencies.relevant_competencies)
        )
    else:
        st.caption("No relevant competencies")

    st.subheader("Projects")
    for project in result.customized_projects:
        with st.expander(f"{project.project_name} (relevance {project.relevance_score:g}/10)"):
            st.markdown(project.customized_description)
            with st.popover("PARC analysis"):
                parc = project.parc_analysis
                st.markdown(
                    f"**Problem:** {parc.problem}\n\n"
                    f"**Accountability:** {parc.accountability}\n\n"
                    f"**Role:** {parc.role}\n\n"
                    f"**Result:** {parc.result}"
                )

    st.divider()

    st.write("**Download Options**")
    document = format_customization_result(result)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="Download Markdown",
            data=document,
            file_name="customized_cv.md",
            mime="text/markdown",
            use_container_width=True,
        )
    with col2:
        st.download_button(
            label="Download JSON",
            data=result.model_dump_json(indent=2),
            file_name="customized_cv.json",
            mime="application/json",
            use_container_width=True,
        )
    with col3:
        st.download_button(
            label="Download Plain Text",
            data=markdown_to_plain_text(document),
            file_name="customized_cv.txt",
            mime="text/plain",
            use_container_width=True,
        )


def render_evaluation(result: CustomizationResult) -> None:
    """Render the evaluation tab."""
    evaluation = result.evaluation
    if evaluation.overall_comments:
        st.markdown(evaluation.overall_comments)

    covered = [c for c in evaluation.requirement_coverage if c.covered]
    missing = [c for c in evaluation.requirement_coverage if not c.covered]

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Covered")
        for coverage in covered:
            st.markdown(f"- **{coverage.requirement}**: {coverage.coverage_details}")
    with col2:
        st.subheader("Not Covered")
        for coverage in missing:
            line = f"- **{coverage.requirement}**"
            if coverage.improvement_suggestions:
                line += f": {coverage.improvement_suggestions}"
            st.markdown(line)

    if evaluation.improvement_suggestions:
        st.subheader("Improvement Suggestions")
        for suggestion in evaluation.improvement_suggestions:
            st.markdown(f"- {suggestion}")


def render_validation(result: CustomizationResult) -> None:
    """Render the fact-check findings."""
    validation = result.validation
    overall = validation.overall_validation
    if overall.passes_validation:
        st.success(f"Passed (confidence {overall.confidence_score:g}/10)")
    else:
        st.error(f"Issues found (confidence {overall.confidence_score:g}/10)")
    if overall.summary:
        st.markdown(overall.summary)

    profile = validation.profile_validation
    st.subheader("Profile")
    if profile.has_issues:
        for claim in profile.fabricated_claims:
            st.markdown(f"- Fabricated: {claim}")
        for claim in profile.unsupported_claims:
            st.markdown(f"- Unsupported: {claim}")
    else:
        st.caption("No issues")

    st.subheader("Competencies")
    unsupported = validation.competencies_validation.unsupported_competencies
    if unsupported:
        st.markdown("\n".join(f"- Unsupported: {item}" for item in unsupported))
    else:
        st.caption("No issues")

    st.subheader("Projects")
    for finding in validation.projects_validation:
        mark = "OK" if finding.is_factually_accurate else "Issues"
        with st.expander(f"{finding.project_name}: {mark}"):
            for detail in finding.fabricated_details:
                st.markdown(f"- Fabricated: {detail}")
            for claim in finding.unsupported_claims:
                st.markdown(f"- Unsupported: {claim}")
            if finding.reasoning:
                st.caption(finding.reasoning)

    if overall.recommendations:
        st.subheader("Recommendations")
        for item in overall.recommendations:
            st.markdown(f"- {item}")


def render_corrections(result: CustomizationResult) -> None:
    """Render the correction report, if one was made."""
    report = result.correction
    if report is None:
        st.info("No correction needed - validation passed.")
        return

    summary = report.correction_summary
    st.markdown(
        f"**{summary.total_issues_fixed} issues fixed** "
        f"(confidence {summary.confidence_score:g}/10)"
    )

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Major Changes")
        for item in summary.major_changes:
            st.markdown(f"- {item}")
    with col2:
        st.subheader("Quality Improvements")
        for item in summary.quality_improvements:
            st.markdown(f"- {item}")

    if report.corrected_profile.changes_made:
        st.subheader("Profile Changes")
        for change in report.corrected_profile.changes_made:
            st.markdown(f"- {change}")

    if report.corrected_competencies.removed_competencies:
        st.subheader("Removed Competencies")
        for item in report.corrected_competencies.removed_competencies:
            st.markdown(f"- {item}")
