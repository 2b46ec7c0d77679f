"""CV quality analysis inputs and report for Streamlit UI."""

import streamlit as st
from components.result_display import score_color

from cv_customizer.models.quality import (
    CRITERION_DESCRIPTIONS,
    CRITERION_NAMES,
    CompetenceVerification,
    ContentCompleteness,
    CVAnalysis,
    ProjectDescriptions,
    SummaryQuality,
)
from cv_customizer.output.markdown import format_cv_analysis
from cv_customizer.prompts.checklists import (
    ASSIGNMENTS_CHECKLISTS,
    SUMMARY_CHECKLISTS,
    Checklist,
)


def checklist_options(checklists: dict[str, Checklist]) -> dict[str, str]:
    """Display name to checklist id, in definition order."""
    return {checklist.name: checklist.id for checklist in checklists.values()}


def _render_checklist_editor(label: str, checklists: dict[str, Checklist], key: str) -> str:
    options = checklist_options(checklists)
    name = st.selectbox(label, list(options), key=f"{key}_choice")
    checklist = checklists[options[name]]
    # Keyed by checklist id so switching checklists resets the editor
    return st.text_area(
        f"{label} text",
        value=checklist.content,
        height=200,
        key=f"{key}_{checklist.id}",
        label_visibility="collapsed",
    )


def render_checklist_inputs() -> tuple[str, str]:
    """Checklist pickers with editable text; returns (summary, assignments) guidelines."""
    col1, col2 = st.columns(2)
    with col1:
        summary = _render_checklist_editor("Summary checklist", SUMMARY_CHECKLISTS, "summary")
    with col2:
        assignments = _render_checklist_editor(
            "Assignments checklist", ASSIGNMENTS_CHECKLISTS, "assignments"
        )
    return summary, assignments


def render_analysis(analysis: CVAnalysis) -> None:
    """Render a completed CV quality analysis."""
    st.divider()

    st.markdown(
        f"""
        <span style="font-size: 0.9rem; color: #666;">Overall Score</span>
        <div style="font-size: 2.5rem; font-weight: bold;
                    color: {score_color(analysis.overall_score)};">
            {analysis.overall_score:.1f}/10
        </div>
        """,
        unsafe_allow_html=True,
    )
    if analysis.summary:
        st.markdown(analysis.summary)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Key Strengths")
        st.markdown("\n".join(f"- {item}" for item in analysis.key_strengths))
    with col2:
        st.subheader("Key Improvement Areas")
        st.markdown("\n".join(f"- {item}" for item in analysis.key_improvement_areas))

    st.subheader("Criteria")
    for criterion, rating in analysis.ratings():
        with st.expander(f"{CRITERION_NAMES[criterion]}: {rating.score:.1f}/10"):
            st.caption(CRITERION_DESCRIPTIONS[criterion])
            if rating.reasoning:
                st.markdown(rating.reasoning)
            if rating.suggestions:
                st.markdown("**Suggestions**")
                st.markdown("\n".join(f"- {s}" for s in rating.suggestions))

            if isinstance(rating, ContentCompleteness):
                for check in rating.element_verification:
                    icon = ":white_check_mark:" if check.present else ":x:"
                    comment = f": {check.comment}" if check.comment else ""
                    st.markdown(f"{icon} {check.element}{comment}")
            elif isinstance(rating, ProjectDescriptions):
                for project in rating.project_evaluations:
                    st.markdown(f"**{project.project_name}** ({project.score:.1f}/10)")
                    for strength in project.strengths:
                        st.markdown(f"- :green[+] {strength}")
                    for weakness in project.weaknesses:
                        st.markdown(f"- :red[-] {weakness}")
                    if project.improved_version:
                        st.info(project.improved_version)
            elif isinstance(rating, CompetenceVerification):
                if rating.unverified_competencies:
                    st.warning(
                        "Unverified competencies: " + ", ".join(rating.unverified_competencies)
                    )
                if rating.unverified_roles:
                    st.warning("Unverified roles: " + ", ".join(rating.unverified_roles))
            elif isinstance(rating, SummaryQuality) and rating.original_summary:
                st.markdown("**Original summary**")
                st.markdown(f"> {rating.original_summary}")

            if rating.improved_version and not isinstance(rating, ProjectDescriptions):
                st.markdown("**Improved version**")
                st.success(rating.improved_version)

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="Download Markdown",
            data=format_cv_analysis(analysis),
            file_name="cv_analysis.md",
            mime="text/markdown",
            use_container_width=True,
        )
    with col2:
        st.download_button(
            label="Download JSON",
            data=analysis.model_dump_json(indent=2),
            file_name="cv_analysis.json",
            mime="application/json",
            use_container_width=True,
        )
