"""Tests for the command line interface."""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from cv_customizer.agents.errors import ContentCompletenessFailed, FailureKind
from cv_customizer.main import app, format_time
from cv_customizer.models.progress import ProgressUpdate, StepId

runner = CliRunner()


@pytest.fixture
def files(tmp_path, pdf_factory):
    cv = tmp_path / "cv.pdf"
    cv.write_bytes(pdf_factory("Jane Doe"))
    tender = tmp_path / "tender.pdf"
    tender.write_bytes(pdf_factory("Must have Python"))
    return cv, tender


class TestFormatTime:
    def test_seconds(self) -> None:
        assert format_time(4.3) == "4.3s"

    def test_minutes(self) -> None:
        assert format_time(125) == "2m 5s"


class TestCustomizeCommand:
    """Tests for the customize command."""

    @patch("cv_customizer.main.run_cv_customization")
    def test_writes_outputs(self, mock_run: MagicMock, files, tmp_path, sample_result) -> None:
        def fake_run(cv, requirements, provider, model, progress):
            progress(
                ProgressUpdate(
                    step=StepId.EVALUATION, status="completed", message="Scored", progress=80
                )
            )
            return {"errors": [], "result": sample_result}

        mock_run.side_effect = fake_run
        cv, tender = files
        output = tmp_path / "out" / "cv.md"
        json_path = tmp_path / "result.json"

        result = runner.invoke(
            app,
            [
                "customize",
                str(cv),
                str(tender),
                "-o",
                str(output),
                "--json",
                str(json_path),
                "-p",
                "anthropic",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "CV Evaluation" in result.output
        assert "8/10" in result.output
        assert output.read_text(encoding="utf-8").startswith("# Customized CV")
        assert json.loads(json_path.read_text(encoding="utf-8"))["language_code"] == "no"

        cv_upload, requirement_uploads = mock_run.call_args.args
        assert cv_upload == (cv.read_bytes(), "cv.pdf")
        assert [name for _, name in requirement_uploads] == ["tender.pdf"]
        assert mock_run.call_args.kwargs["provider"] == "anthropic"
        assert mock_run.call_args.kwargs["model"] is None

    @patch("cv_customizer.main.run_cv_customization")
    def test_errors_exit_nonzero(self, mock_run: MagicMock, files, tmp_path) -> None:
        mock_run.return_value = {"errors": ["Failed to evaluate customized CV"], "result": None}
        cv, tender = files
        output = tmp_path / "cv.md"

        result = runner.invoke(app, ["customize", str(cv), str(tender), "-o", str(output)])

        assert result.exit_code == 1
        assert "Failed to evaluate customized CV" in result.output
        assert not output.exists()

    @patch("cv_customizer.main.run_cv_customization")
    def test_missing_file(self, mock_run: MagicMock, files, tmp_path) -> None:
        cv, _ = files

        result = runner.invoke(app, ["customize", str(cv), str(tmp_path / "missing.pdf")])

        assert result.exit_code == 1
        assert "File not found" in result.output
        mock_run.assert_not_called()


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    @patch("cv_customizer.main.run_cv_analysis")
    def test_writes_outputs(
        self, mock_run: MagicMock, files, tmp_path, sample_analysis
    ) -> None:
        mock_run.return_value = sample_analysis
        cv, _ = files
        output = tmp_path / "analysis.md"
        json_path = tmp_path / "analysis.json"

        result = runner.invoke(
            app,
            [
                "analyze",
                str(cv),
                "-o",
                str(output),
                "--json",
                str(json_path),
                "--summary-checklist",
                "concise",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "7.0/10" in result.output
        assert output.read_text(encoding="utf-8").startswith("# CV Analysis")
        assert json.loads(json_path.read_text(encoding="utf-8"))["overall_score"] == 7.0

        assert mock_run.call_args.args[0] == (cv.read_bytes(), "cv.pdf")
        kwargs = mock_run.call_args.kwargs
        assert kwargs["summary_checklist"].startswith("Summary checklist (concise version)")
        assert kwargs["assignments_checklist"].startswith("Key assignments:")

    @patch("cv_customizer.main.run_cv_analysis")
    def test_unknown_checklist(self, mock_run: MagicMock, files) -> None:
        cv, _ = files

        result = runner.invoke(app, ["analyze", str(cv), "--assignments-checklist", "short"])

        assert result.exit_code == 1
        assert "Unknown checklist" in result.output
        mock_run.assert_not_called()

    @patch("cv_customizer.main.run_cv_analysis")
    def test_failure_exits_nonzero(self, mock_run: MagicMock, files, tmp_path) -> None:
        mock_run.side_effect = ContentCompletenessFailed(FailureKind.PROVIDER)
        cv, _ = files
        output = tmp_path / "analysis.md"

        result = runner.invoke(app, ["analyze", str(cv), "-o", str(output)])

        assert result.exit_code == 1
        assert "Failed to evaluate content completeness" in result.output
        assert not output.exists()


class TestModelsCommand:
    def test_lists_pdf_models(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")

        result = runner.invoke(app, ["models"])

        assert result.exit_code == 0
        assert "gpt-4o" in result.output
        assert "mistral" not in result.output

    def test_all_models(self) -> None:
        result = runner.invoke(app, ["models", "--all"])
        assert "mistral" in result.output


class TestVersionCommand:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "CV Customizer v0.1.0" in result.output


class TestUiCommand:
    @patch("cv_customizer.main.subprocess.run")
    def test_launches_streamlit(self, mock_run: MagicMock) -> None:
        result = runner.invoke(app, ["ui"])

        assert result.exit_code == 0
        command = mock_run.call_args.args[0]
        assert command[1:4] == ["-m", "streamlit", "run"]
        assert command[4].endswith("app.py")
