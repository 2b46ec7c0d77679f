"""Tests for the pure helpers of the Streamlit UI."""

import pytest

from components.analysis_display import checklist_options
from components.file_upload import _size_label
from components.model_selector import model_label, selectable_models
from components.progress_display import render_step_checklist
from components.result_display import markdown_to_plain_text, score_color
from cv_customizer.llm.catalog import find_model
from cv_customizer.models.progress import ProgressUpdate, StepId
from cv_customizer.progress import ProgressTracker
from cv_customizer.prompts.checklists import ASSIGNMENTS_CHECKLISTS
from utils.diagnostics import format_elapsed_time, parse_error_details


class TestParseErrorDetails:
    """Tests for mapping pipeline errors to explanations."""

    def test_input_failure(self) -> None:
        details = parse_error_details("cv.pdf is empty", "openai", "gpt-4o", failure_kind="input")

        assert details["category"] == "input"
        assert details["explanation"] == "cv.pdf is empty"

    def test_schema_failure(self) -> None:
        details = parse_error_details(
            "Failed to evaluate customized CV", "openai", "gpt-4o", failure_kind="schema"
        )
        assert details["category"] == "schema"

    @pytest.mark.parametrize(
        ("message", "category"),
        [
            ("Failed to customize CV profile: Request timed out.", "connection"),
            ("Failed to customize CV profile: Error code: 401 - invalid api key", "auth"),
            ("Failed to customize CV profile: Error code: 429 rate limit", "rate_limit"),
            ("Failed to customize CV profile: model_not_found", "model"),
            ("Failed: maximum context length is 128000 tokens", "context"),
            ("Failed: Error code: 503 Service Unavailable", "server"),
            ("Failed to customize CV profile", "unknown"),
        ],
    )
    def test_provider_failures(self, message: str, category: str) -> None:
        details = parse_error_details(message, "anthropic", "claude", failure_kind="provider")

        assert details["category"] == category
        assert details["technical"] == message
        assert details["solution"]

    def test_provider_named_in_explanation(self) -> None:
        details = parse_error_details("connection refused", "google", "gemini-2.5-pro")
        assert "Google" in details["explanation"]


class TestFormatElapsedTime:
    def test_seconds(self) -> None:
        assert format_elapsed_time(12.34) == "12.3s"

    def test_minutes(self) -> None:
        assert format_elapsed_time(61) == "1m 1s"


class TestRenderStepChecklist:
    """Tests for the HTML step checklist."""

    @staticmethod
    def _tracker() -> ProgressTracker:
        tracker = ProgressTracker()
        tracker(
            ProgressUpdate(
                step=StepId.LANGUAGE_DETECTION,
                status="completed",
                message="Detected",
                data={"language": "Norwegian", "confidence": 0.9},
                progress=30,
            )
        )
        tracker(
            ProgressUpdate(
                step=StepId.REQUIREMENTS_ANALYSIS,
                status="starting",
                message="Analyzing <customer> requirements...",
                progress=35,
            )
        )
        return tracker

    def test_one_line_per_step(self) -> None:
        html = render_step_checklist(self._tracker().snapshot())

        assert html.count("<div") == len(StepId) - 1
        assert "Completion" not in html

    def test_summary_and_running_message(self) -> None:
        html = render_step_checklist(self._tracker().snapshot())

        assert "Language: Norwegian (90% confidence)" in html
        assert "Analyzing &lt;customer&gt; requirements" in html
        assert "step-spinner" in html

    def test_hides_skipped_corrections(self) -> None:
        html = render_step_checklist(self._tracker().snapshot(), hide_pending_skips=True)

        assert "Profile Correction" not in html
        assert "Correction Check" in html


class TestModelSelection:
    def test_pdf_models_by_default(self) -> None:
        options = selectable_models(show_text_only=False)
        assert all(option.supports_pdf for option in options)

    def test_provider_filter(self) -> None:
        options = selectable_models(show_text_only=True, provider="mistral")
        assert [o.model for o in options] == [
            "mistral-large-latest",
            "mistral-medium-latest",
            "mistral-small-latest",
        ]

    def test_text_only_label(self) -> None:
        assert model_label(find_model("mistral", "mistral-large-latest")) == (
            "Mistral Large (Mistral) - text only"
        )
        assert model_label(find_model("openai", "gpt-4o")) == "OpenAI GPT-4o (OpenAI)"


class TestResultHelpers:
    def test_markdown_to_plain_text(self) -> None:
        text = markdown_to_plain_text("## Profile\n**Python** and *Azure* [docs](http://x)")
        assert text == "Profile\nPython and Azure docs"

    @pytest.mark.parametrize(("score", "color"), [(8, "#28a745"), (5, "#ffc107"), (2, "#dc3545")])
    def test_score_color(self, score: float, color: str) -> None:
        assert score_color(score) == color

    def test_size_label(self) -> None:
        assert _size_label(2048) == "2 KB"
        assert _size_label(20 * 1024 * 1024) == "20.0 MB"


class TestAnalysisHelpers:
    def test_checklist_options(self) -> None:
        assert checklist_options(ASSIGNMENTS_CHECKLISTS) == {
            "Default Assignments Checklist": "default",
            "Achievement-Focused Assignments": "achievement",
            "Technical Projects Checklist": "technical",
        }
