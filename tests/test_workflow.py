"""Tests for LangGraph workflow assembly and execution."""

from unittest.mock import MagicMock, patch

import pytest

from conftest import ScriptedProvider
from cv_customizer.graph.stages import STAGES, StageDescriptor
from cv_customizer.graph.workflow import (
    create_customization_graph,
    initial_state,
    node_name,
    run_cv_customization,
)
from cv_customizer.models.correction import (
    CompetenciesCorrection,
    ProfileCorrection,
    ProjectsCorrection,
)
from cv_customizer.models.progress import StepId
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.models.result import CustomizationResult
from cv_customizer.progress import ProgressTracker

PASSING_PROGRESS = [
    ("validation", "starting", 5),
    ("validation", "completed", 10),
    ("file_processing", "starting", 15),
    ("file_processing", "completed", 20),
    ("language_detection", "starting", 25),
    ("language_detection", "completed", 30),
    ("requirements_analysis", "starting", 35),
    ("requirements_analysis", "completed", 45),
    ("profile_customization", "starting", 50),
    ("profile_customization", "completed", 55),
    ("competencies_customization", "starting", 58),
    ("competencies_customization", "completed", 62),
    ("projects_customization", "starting", 65),
    ("projects_customization", "completed", 70),
    ("evaluation", "starting", 75),
    ("evaluation", "completed", 80),
    ("content_validation", "starting", 85),
    ("content_validation", "completed", 90),
    ("correction_check", "starting", 97),
    ("correction_check", "completed", 97),
    ("complete", "completed", 100),
]


@pytest.fixture
def uploads(pdf_factory):
    cv = (pdf_factory("Jane Doe\nPython consultant"), "cv.pdf")
    requirements = [
        (pdf_factory("Must have Python"), "tender.pdf"),
        (pdf_factory("Should speak Norwegian"), "appendix.pdf"),
    ]
    return cv, requirements


@pytest.fixture
def openai_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("CV_CUSTOMIZER_PROVIDER", raising=False)
    monkeypatch.delenv("CV_CUSTOMIZER_MODEL", raising=False)
    return "sk-test"


def _run(uploads, provider: ScriptedProvider, **kwargs):
    channel = MagicMock()
    cv, requirements = uploads
    with patch(
        "cv_customizer.graph.workflow.get_llm_provider", return_value=provider
    ) as mock_factory:
        state = run_cv_customization(
            cv, requirements, provider="openai", model="gpt-4o", progress=channel, **kwargs
        )
    events = [
        (u.step.value, u.status, u.progress)
        for u in (c.args[0] for c in channel.call_args_list)
    ]
    return state, events, mock_factory


class TestCreateCustomizationGraph:
    """Tests for graph assembly."""

    def test_one_node_per_stage(self) -> None:
        graph = create_customization_graph(MagicMock())

        assert {node_name(s.step) for s in STAGES} <= set(graph.nodes)

    def test_node_names_do_not_clash_with_state_keys(self) -> None:
        state_keys = set(initial_state(None, [], "openai", "gpt-4o"))
        assert not {node_name(s.step) for s in STAGES} & state_keys

    def test_rejects_invalid_stage_table(self) -> None:
        stages = [
            StageDescriptor(
                StepId.EVALUATION, frozenset({"customer_requirements"}), frozenset(), 10, 20
            )
        ]
        with pytest.raises(ValueError):
            create_customization_graph(MagicMock(), stages=stages)


class TestRunCVCustomization:
    """End-to-end runs with a scripted provider."""

    def test_passing_run(self, uploads, scripted_provider, openai_key) -> None:
        state, events, mock_factory = _run(uploads, scripted_provider)

        assert state["errors"] == []
        assert state["failed_step"] is None
        assert events == PASSING_PROGRESS
        mock_factory.assert_called_once_with("openai", "gpt-4o", "sk-test", timeout=120.0)

        result = state["result"]
        assert isinstance(result, CustomizationResult)
        assert result.correction is None
        assert result.language_code == "no"
        assert [p.project_name for p in result.customized_projects] == [
            "Tax Portal",
            "Health Records",
        ]
        assert state["total_time"] >= 0
        assert [t["step_name"] for t in state["step_timings"]][-1] == "correction_check"

    def test_requirement_documents_attached_in_order(
        self, uploads, scripted_provider, openai_key
    ) -> None:
        _run(uploads, scripted_provider)

        prompt = next(p for s, p, _ in scripted_provider.calls if s is CustomerRequirements)
        assert [d.filename for d in prompt.documents] == ["tender.pdf", "appendix.pdf"]

    def test_correcting_run(self, uploads, correcting_provider, openai_key) -> None:
        state, events, _ = _run(uploads, correcting_provider)

        assert state["errors"] == []
        assert events[18:24] == [
            ("profile_correction", "starting", 91),
            ("profile_correction", "completed", 92),
            ("competencies_correction", "starting", 93),
            ("competencies_correction", "completed", 94),
            ("projects_correction", "starting", 95),
            ("projects_correction", "completed", 96),
        ]
        assert events[-1] == ("complete", "completed", 100)

        result = state["result"]
        summary = result.correction.correction_summary
        assert summary.total_issues_fixed == 3
        assert summary.confidence_score == 6
        assert result.key_competencies.relevant_competencies == ["Python", "Scrum"]
        assert result.customized_projects[0].customized_description == (
            "Led the Python backend of Tax Portal."
        )
        assert correcting_provider.schemas_called()[-3:] == [
            ProfileCorrection,
            CompetenciesCorrection,
            ProjectsCorrection,
        ]

    def test_failure_stops_the_run(self, uploads, scripted_provider, openai_key) -> None:
        scripted_provider.responses[CustomerRequirements] = ConnectionError("Connection refused")

        state, events, _ = _run(uploads, scripted_provider)

        assert state["result"] is None
        assert state["failed_step"] == "requirements_analysis"
        assert state["failure_kind"] == "provider"
        assert state["failure_cause"] == "Connection refused"
        assert events[-1] == ("requirements_analysis", "error", 35)
        assert CustomerRequirements == scripted_provider.schemas_called()[-1]

    def test_missing_api_key(self, uploads, scripted_provider, monkeypatch) -> None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        state, events, _ = _run(uploads, scripted_provider)

        assert state["failed_step"] == "validation"
        assert state["errors"] == ["openai API key is not configured"]
        assert events == [("validation", "starting", 5), ("validation", "error", 5)]
        assert scripted_provider.calls == []

    def test_unknown_provider_builds_no_client(self, uploads) -> None:
        cv, requirements = uploads
        with patch("cv_customizer.graph.workflow.get_llm_provider") as mock_factory:
            state = run_cv_customization(cv, requirements, provider="cohere", model="command")

        mock_factory.assert_not_called()
        assert state["failure_kind"] == "input"
        assert "Unknown provider: cohere" in state["errors"][0]

    def test_tracker_receives_result(self, uploads, scripted_provider, openai_key) -> None:
        results = []
        tracker = ProgressTracker(on_complete=results.append)
        cv, requirements = uploads

        with patch("cv_customizer.graph.workflow.get_llm_provider", return_value=scripted_provider):
            state = run_cv_customization(cv, requirements, "openai", "gpt-4o", progress=tracker)

        assert results == [state["result"]]
        assert tracker.progress == 100
        assert tracker.step(StepId.PROFILE_CORRECTION).status == "pending"
        assert tracker.step(StepId.CORRECTION_CHECK).status == "completed"
