"""Tests for LangGraph node functions."""

from unittest.mock import MagicMock, patch

import pytest

from conftest import ScriptedProvider
from cv_customizer.graph.nodes import (
    INPUT_FAILURE,
    INTERNAL_FAILURE,
    check_run_parameters,
    correction_needed,
    create_nodes,
    emit_progress,
)
from cv_customizer.graph.workflow import initial_state
from cv_customizer.models.correction import ProfileCorrection
from cv_customizer.models.progress import StepId
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.validation import ProjectValidation


@pytest.fixture
def uploads(pdf_factory):
    cv = (pdf_factory("Jane Doe\nPython consultant"), "cv.pdf")
    requirements = [(pdf_factory("Must have Python"), "tender.pdf")]
    return cv, requirements


@pytest.fixture
def base_state(uploads):
    cv, requirements = uploads
    return initial_state(cv, requirements, "openai", "gpt-4o")


@pytest.fixture
def customized_state(
    base_state,
    cv_document,
    language,
    sample_requirements,
    sample_profile,
    sample_competencies,
    sample_projects,
    sample_evaluation,
):
    """State as it stands after evaluation."""
    base_state.update(
        cv_document=cv_document,
        language=language,
        customer_requirements=sample_requirements,
        profile_customization=sample_profile,
        key_competencies=sample_competencies,
        customized_projects=sample_projects,
        evaluation=sample_evaluation,
    )
    return base_state


def _events(channel: MagicMock) -> list[tuple[str, str, float]]:
    return [
        (u.step.value, u.status, u.progress)
        for u in (c.args[0] for c in channel.call_args_list)
    ]


class TestCheckRunParameters:
    """Tests for upload and provider/model checks."""

    def test_valid(self, base_state) -> None:
        assert check_run_parameters(base_state, "sk-test") == []

    def test_missing_uploads(self, base_state) -> None:
        base_state.update(cv_upload=None, requirement_uploads=[])

        errors = check_run_parameters(base_state, "sk-test")

        assert errors == [
            "CV file is missing",
            "At least one customer requirements file is required",
        ]

    def test_unknown_provider(self, base_state) -> None:
        base_state["provider"] = "cohere"
        assert check_run_parameters(base_state, None) == ["Unknown provider: cohere"]

    def test_unknown_model(self, base_state) -> None:
        base_state["model"] = "gpt-2"
        assert check_run_parameters(base_state, "sk-test") == ["Unknown model for openai: gpt-2"]

    def test_text_only_model(self, base_state) -> None:
        base_state.update(provider="mistral", model="mistral-large-latest")
        assert check_run_parameters(base_state, "key") == [
            "Mistral Large does not support PDF documents"
        ]

    def test_missing_api_key(self, base_state) -> None:
        assert check_run_parameters(base_state, None) == ["openai API key is not configured"]


class TestEmitProgress:
    def test_sends_update(self) -> None:
        channel = MagicMock()

        emit_progress(channel, StepId.EVALUATION, "starting", "Evaluating...", 75)

        update = channel.call_args.args[0]
        assert (update.step, update.status, update.progress) == (StepId.EVALUATION, "starting", 75)

    def test_no_channel(self) -> None:
        emit_progress(None, StepId.EVALUATION, "starting", "Evaluating...", 75)

    def test_channel_errors_are_swallowed(self) -> None:
        channel = MagicMock(side_effect=RuntimeError("display closed"))
        emit_progress(channel, StepId.EVALUATION, "completed", "Done", 80)
        channel.assert_called_once()


class TestCorrectionNeeded:
    def test_passing_validation(self, customized_state, passing_validation) -> None:
        customized_state["validation"] = passing_validation
        for step in (
            StepId.PROFILE_CORRECTION,
            StepId.COMPETENCIES_CORRECTION,
            StepId.PROJECTS_CORRECTION,
        ):
            assert not correction_needed(step, customized_state)

    def test_failing_validation(self, customized_state, failing_validation) -> None:
        customized_state["validation"] = failing_validation
        assert correction_needed(StepId.PROFILE_CORRECTION, customized_state)
        assert correction_needed(StepId.COMPETENCIES_CORRECTION, customized_state)
        assert correction_needed(StepId.PROJECTS_CORRECTION, customized_state)

    def test_only_flagged_sections(self, customized_state, failing_validation) -> None:
        validation = failing_validation.model_copy(
            update={
                "competencies_validation": failing_validation.competencies_validation.model_copy(
                    update={"unsupported_competencies": []}
                )
            }
        )
        customized_state["validation"] = validation

        assert correction_needed(StepId.PROFILE_CORRECTION, customized_state)
        assert not correction_needed(StepId.COMPETENCIES_CORRECTION, customized_state)

    def test_projects_flagged_by_quoted_text(self, customized_state, failing_validation) -> None:
        """Test that quoted text triggers correction even for an accurate verdict."""
        customized_state["validation"] = failing_validation.model_copy(
            update={
                "projects_validation": [
                    ProjectValidation(
                        project_name="Tax Portal",
                        is_factually_accurate=True,
                        fabricated_details=["Led a team of 40"],
                    ),
                    ProjectValidation(project_name="Health Records"),
                ]
            }
        )

        assert correction_needed(StepId.PROJECTS_CORRECTION, customized_state)

    def test_projects_without_quoted_text(self, customized_state, failing_validation) -> None:
        customized_state["validation"] = failing_validation.model_copy(
            update={
                "projects_validation": [
                    ProjectValidation(project_name="Tax Portal", is_factually_accurate=False),
                    ProjectValidation(project_name="Health Records"),
                ]
            }
        )

        assert not correction_needed(StepId.PROJECTS_CORRECTION, customized_state)


class TestNodes:
    """Tests for the node wrappers around each stage."""

    def test_validation_failure_is_input_failure(self, base_state) -> None:
        channel = MagicMock()
        nodes = create_nodes(None, progress=channel, api_key=None)
        base_state["cv_upload"] = None

        result = nodes[StepId.VALIDATION](base_state)

        assert result["failed_step"] == "validation"
        assert result["failure_kind"] == INPUT_FAILURE
        assert result["failure_cause"] is None
        assert "CV file is missing" in result["errors"][0]
        assert _events(channel) == [("validation", "starting", 5), ("validation", "error", 5)]

    def test_file_processing_loads_documents(self, base_state) -> None:
        channel = MagicMock()
        nodes = create_nodes(None, progress=channel)

        result = nodes[StepId.FILE_PROCESSING](base_state)

        assert result["cv_document"].filename == "cv.pdf"
        assert result["cv_document"].has_text
        assert [d.filename for d in result["requirement_documents"]] == ["tender.pdf"]
        assert result["current_step"] == "file_processing"
        assert result["last_progress"] == 20
        assert result["step_timings"][0]["step_name"] == "file_processing"
        assert channel.call_args.args[0].data == {"customer_files": 1}

    def test_file_processing_rejects_empty_upload(self, base_state) -> None:
        base_state["requirement_uploads"] = [(b"", "tender.pdf")]
        nodes = create_nodes(None)

        result = nodes[StepId.FILE_PROCESSING](base_state)

        assert result["errors"] == ["tender.pdf is empty"]
        assert result["failure_kind"] == INPUT_FAILURE

    def test_file_processing_size_limit(self, base_state) -> None:
        nodes = create_nodes(None, max_document_bytes=10)

        result = nodes[StepId.FILE_PROCESSING](base_state)

        assert "too large" in result["errors"][0]

    def test_language_detection(self, customized_state, language) -> None:
        channel = MagicMock()
        nodes = create_nodes(ScriptedProvider({type(language): language}), progress=channel)

        result = nodes[StepId.LANGUAGE_DETECTION](customized_state)

        assert result["language"] == language
        completed = channel.call_args.args[0]
        assert completed.message == "Detected language: Norwegian (95% confidence)"
        assert completed.data["language_code"] == "no"

    def test_stage_failure_records_kind_and_cause(self, customized_state) -> None:
        channel = MagicMock()
        provider = ScriptedProvider({CustomerRequirements: TimeoutError("Request timed out")})
        nodes = create_nodes(provider, progress=channel)
        customized_state["requirement_documents"] = [customized_state["cv_document"]]

        result = nodes[StepId.REQUIREMENTS_ANALYSIS](customized_state)

        assert result["errors"] == ["Failed to analyze customer requirements"]
        assert result["failed_step"] == "requirements_analysis"
        assert result["failure_kind"] == "provider"
        assert result["failure_cause"] == "Request timed out"
        assert result["last_progress"] == 35
        assert _events(channel)[-1] == ("requirements_analysis", "error", 35)

    def test_unexpected_error_is_internal_failure(
        self, customized_state, failing_validation
    ) -> None:
        channel = MagicMock()
        nodes = create_nodes(ScriptedProvider({}), progress=channel)
        customized_state["validation"] = failing_validation

        with patch(
            "cv_customizer.graph.nodes.correction_needed", side_effect=RuntimeError("boom")
        ):
            result = nodes[StepId.PROFILE_CORRECTION](customized_state)

        assert result["errors"] == ["Unexpected error: boom"]
        assert result["failed_step"] == "profile_correction"
        assert result["failure_kind"] == INTERNAL_FAILURE
        assert _events(channel) == [("profile_correction", "error", 91)]

    def test_skipped_correction_reports_nothing(
        self, customized_state, passing_validation
    ) -> None:
        channel = MagicMock()
        provider = ScriptedProvider({})
        nodes = create_nodes(provider, progress=channel)
        customized_state["validation"] = passing_validation

        for step in (
            StepId.PROFILE_CORRECTION,
            StepId.COMPETENCIES_CORRECTION,
            StepId.PROJECTS_CORRECTION,
        ):
            assert nodes[step](customized_state) == {"current_step": step.value}

        channel.assert_not_called()
        assert provider.calls == []

    def test_profile_correction_runs_when_flagged(
        self, customized_state, failing_validation, sample_profile_correction
    ) -> None:
        provider = ScriptedProvider({ProfileCorrection: sample_profile_correction})
        nodes = create_nodes(provider)
        customized_state["validation"] = failing_validation

        result = nodes[StepId.PROFILE_CORRECTION](customized_state)

        assert result["profile_correction"] == sample_profile_correction
        assert result["last_progress"] == 92

    def test_correction_check_passing(self, customized_state, passing_validation) -> None:
        channel = MagicMock()
        nodes = create_nodes(ScriptedProvider({}), progress=channel)
        customized_state["validation"] = passing_validation

        result = nodes[StepId.CORRECTION_CHECK](customized_state)

        assert result["correction"] is None
        final = result["result"]
        assert final.correction is None
        assert final.language_code == "no"
        assert final.profile_customization == customized_state["profile_customization"]
        completed = channel.call_args.args[0]
        assert completed.message == "No correction needed - validation passed"
        assert completed.progress == 97

    def test_correction_check_applies_corrections(
        self,
        customized_state,
        failing_validation,
        sample_profile_correction,
    ) -> None:
        nodes = create_nodes(ScriptedProvider({}))
        customized_state.update(
            validation=failing_validation, profile_correction=sample_profile_correction
        )

        result = nodes[StepId.CORRECTION_CHECK](customized_state)

        final = result["result"]
        assert final.correction.correction_summary.total_issues_fixed == 1
        assert (
            final.profile_customization.customized_profile
            == sample_profile_correction.corrected_profile
        )
        assert final.key_competencies == customized_state["key_competencies"]
