"""Streamlit web UI for CV Customizer."""

import sys
import time
from pathlib import Path

# Add project root and src to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

# Load environment variables from .env.local
from dotenv import load_dotenv  # noqa: E402

load_dotenv(project_root / ".env.local")

import streamlit as st  # noqa: E402
from components.analysis_display import render_analysis, render_checklist_inputs  # noqa: E402
from components.file_upload import render_cv_upload, render_requirements_upload  # noqa: E402
from components.model_selector import PROVIDER_LABELS, render_model_selector  # noqa: E402
from components.progress_display import ProgressPanel  # noqa: E402
from components.result_display import render_result  # noqa: E402
from utils.diagnostics import format_elapsed_time, parse_error_details  # noqa: E402
from utils.styles import apply_custom_styles  # noqa: E402

from cv_customizer.config import get_settings  # noqa: E402
from cv_customizer.graph.nodes import INPUT_FAILURE  # noqa: E402
from cv_customizer.progress import ProgressTracker  # noqa: E402


def render_error_details(error_info: dict, elapsed_time: float | None = None):
    """Render detailed error information in Streamlit."""
    st.error(f"**{error_info['title']}**")

    if elapsed_time is not None:
        st.markdown(f"*Failed after {format_elapsed_time(elapsed_time)}*")

    st.markdown(f"**What happened:** {error_info['explanation']}")
    st.markdown(f"**Likely cause:** {error_info['cause']}")

    st.markdown("**How to fix it:**")
    for solution in error_info["solution"]:
        st.markdown(f"- {solution}")

    with st.expander("Technical Details", expanded=False):
        st.code(error_info["technical"], language=None)


def render_timing(container, elapsed: float, api_time: float | None, failed: bool = False):
    if failed:
        container.markdown(
            '<div class="timing-display failed">'
            f"Failed after: {format_elapsed_time(elapsed)}</div>",
            unsafe_allow_html=True,
        )
        return
    api_line = f"<br>API processing: {format_elapsed_time(api_time)}" if api_time else ""
    container.markdown(
        '<div class="timing-display">'
        f"Total time: {format_elapsed_time(elapsed)}{api_line}</div>",
        unsafe_allow_html=True,
    )


st.set_page_config(
    page_title="CV Customizer",
    page_icon=":memo:",
    layout="wide",
    initial_sidebar_state="expanded",
)
apply_custom_styles()


def run_customization(params: dict, wall_start_time: float) -> None:
    """Run the pipeline with a live progress panel and store the outcome."""
    # Import here to avoid loading the LLM stack until needed
    from cv_customizer.graph.workflow import run_cv_customization

    provider_label = PROVIDER_LABELS.get(params["provider"], params["provider"])
    st.info(
        "Every section is generated, fact-checked against your CV and corrected where needed. "
        "This can take a few minutes."
    )

    with st.status(f"Customizing your CV with {provider_label}...", expanded=True) as status:
        tracker = ProgressTracker(
            on_complete=lambda result: st.session_state.update(result=result),
        )
        panel = ProgressPanel(tracker)
        timing_container = st.empty()

        final_state = run_cv_customization(
            params["cv"],
            params["requirements"],
            provider=params["provider"],
            model=params["model"],
            api_key=params["api_key"],
            progress=panel,
        )

        panel.redraw(finished=True)
        elapsed = time.time() - wall_start_time

        if final_state.get("errors"):
            render_timing(timing_container, elapsed, None, failed=True)
            status.update(
                label=f"CV customization failed after {format_elapsed_time(elapsed)}",
                state="error",
            )
            st.session_state["result"] = None
            st.session_state["failure"] = final_state
        else:
            render_timing(timing_container, elapsed, final_state.get("total_time"))
            status.update(
                label=f"CV customized successfully! Total: {format_elapsed_time(elapsed)}",
                state="complete",
            )

def render_analysis_page(settings, selection) -> None:
    """Upload a CV, pick the checklists and rate the CV quality."""
    from cv_customizer.agents.errors import CriterionFailed
    from cv_customizer.analysis import run_cv_analysis
    from cv_customizer.documents import InputError

    st.markdown(
        '<p class="header-tagline">Rate your consultant CV on language, completeness, '
        "summary, project descriptions and competence evidence</p>",
        unsafe_allow_html=True,
    )

    cv_upload = render_cv_upload(settings.max_document_bytes)
    summary_checklist, assignments_checklist = render_checklist_inputs()

    st.divider()
    _, col_btn, _ = st.columns([1, 1, 1])
    with col_btn:
        analyze_button = st.button("Analyze My CV", type="primary", use_container_width=True)

    if analyze_button:
        if selection is None:
            st.error("Please select a model in the sidebar.")
            return
        if cv_upload is None:
            st.error("Please upload your CV.")
            return

        start_time = time.time()
        provider_label = PROVIDER_LABELS.get(selection.provider, selection.provider)
        try:
            with st.spinner(f"Analyzing your CV with {provider_label}..."):
                st.session_state["analysis"] = run_cv_analysis(
                    cv_upload,
                    provider=selection.provider,
                    model=selection.model,
                    api_key=selection.api_key,
                    summary_checklist=summary_checklist,
                    assignments_checklist=assignments_checklist,
                )
        except (InputError, CriterionFailed) as e:
            st.session_state["analysis"] = None
            kind = getattr(e, "kind", None)
            cause = e.__cause__
            render_error_details(
                parse_error_details(
                    f"{e}: {cause}" if cause else str(e),
                    selection.provider,
                    selection.model,
                    kind.value if kind else INPUT_FAILURE,
                ),
                time.time() - start_time,
            )
            return
        st.success(f"CV analyzed in {format_elapsed_time(time.time() - start_time)}")

    analysis = st.session_state.get("analysis")
    if analysis is not None:
        render_analysis(analysis)



def main():
    """Main Streamlit application."""
    settings = get_settings()

    if "processing" not in st.session_state:
        st.session_state.processing = False
    if "process_start_time" not in st.session_state:
        st.session_state.process_start_time = None

    with st.sidebar:
        mode = st.radio("Mode", ["Customize CV", "Analyze CV"], horizontal=True)
        st.divider()
        selection = render_model_selector(settings)

        st.divider()
        if settings.langsmith_enabled:
            if "eu.api.smith" in settings.langsmith_endpoint:
                dashboard_url = "https://eu.smith.langchain.com/"
            else:
                dashboard_url = "https://smith.langchain.com/"
            st.success(f"LangSmith tracing: **{settings.langsmith_project}**")
            st.markdown(f"[View traces]({dashboard_url})")

    st.markdown("<h1>CV Customizer</h1>", unsafe_allow_html=True)
    if mode == "Analyze CV":
        render_analysis_page(settings, selection)
        return

    st.markdown(
        '<p class="header-tagline">Tailor your CV to customer requirements, '
        "fact-checked against what your CV actually says</p>",
        unsafe_allow_html=True,
    )

    with st.expander("How to use CV Customizer?"):
        st.markdown(
            """
            1. Pick a model in the sidebar (models marked *text only* cannot read PDFs)
            2. Upload your CV as a PDF on the left
            3. Upload one or more customer requirement documents on the right
            4. Click "Customize My CV" and follow the progress
            5. Review the evaluation and fact check, then download your CV
            """
        )

    col1, col2 = st.columns(2)
    with col1:
        cv_upload = render_cv_upload(settings.max_document_bytes)
    with col2:
        requirement_uploads = render_requirements_upload(settings.max_document_bytes)

    st.divider()

    _, col_btn, _ = st.columns([1, 1, 1])
    with col_btn:
        customize_button = st.button(
            "Customize My CV",
            type="primary",
            use_container_width=True,
            disabled=st.session_state.processing,
        )

    # Phase 1: button clicked - check inputs, store params, rerun
    if customize_button and not st.session_state.processing:
        if selection is None:
            st.error("Please select a model in the sidebar.")
            return
        if cv_upload is None:
            st.error("Please upload your CV in the left panel.")
            return
        if not requirement_uploads:
            st.error("Please upload at least one requirement document in the right panel.")
            return
        if not selection.api_key:
            st.error(
                f"Please provide an API key for {PROVIDER_LABELS[selection.provider]} "
                "in the sidebar or set it in .env.local"
            )
            return

        st.session_state.processing = True
        st.session_state.process_start_time = time.time()
        st.session_state.process_params = {
            "cv": cv_upload,
            "requirements": requirement_uploads,
            "provider": selection.provider,
            "model": selection.model,
            "api_key": selection.api_key,
        }
        st.session_state["result"] = None
        st.session_state["failure"] = None
        st.rerun()

    # Phase 2: processing
    if st.session_state.processing:
        params = st.session_state.process_params
        wall_start_time = st.session_state.process_start_time
        try:
            run_customization(params, wall_start_time)
        except Exception as e:
            elapsed = time.time() - wall_start_time
            st.divider()
            st.subheader("Error Details")
            render_error_details(
                parse_error_details(str(e), params["provider"], params["model"]), elapsed
            )
            with st.expander("Exception Type", expanded=False):
                st.code(f"{type(e).__name__}: {e}", language=None)
        finally:
            st.session_state.processing = False
            st.session_state.process_start_time = None

    failure = st.session_state.get("failure")
    if failure:
        params = st.session_state.process_params
        st.divider()
        st.subheader("Error Details")
        if failure.get("failed_step"):
            st.markdown(f"**Failed during:** {failure['failed_step'].replace('_', ' ')}")
        for error_msg in failure["errors"]:
            cause = failure.get("failure_cause")
            error_info = parse_error_details(
                f"{error_msg}: {cause}" if cause else error_msg,
                params["provider"],
                params["model"],
                failure.get("failure_kind"),
            )
            render_error_details(error_info)

    result = st.session_state.get("result")
    if result is not None:
        render_result(result)


if __name__ == "__main__":
    main()
