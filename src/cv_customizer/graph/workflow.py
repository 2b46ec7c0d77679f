"""Main LangGraph workflow assembly.

The graph is built from the ``STAGES`` table: one node per stage, run in
table order, with a conditional edge after each node that ends the run once
a stage has recorded an error.
"""

import logging
import time
from collections.abc import Sequence
from typing import get_args

from langgraph.graph import END, START, StateGraph

from cv_customizer.config import ProviderName, get_settings
from cv_customizer.graph.edges import should_continue, should_continue_after_file_processing
from cv_customizer.graph.nodes import create_nodes, emit_progress
from cv_customizer.graph.stages import (
    COMPLETE_PROGRESS,
    STAGES,
    StageDescriptor,
    validate_stage_order,
)
from cv_customizer.llm.base import LLMProvider, get_llm_provider
from cv_customizer.llm.catalog import default_model
from cv_customizer.models.progress import StepId
from cv_customizer.models.state import CustomizationState
from cv_customizer.progress import ProgressChannel

logger = logging.getLogger(__name__)

Upload = tuple[bytes, str]


def node_name(step: StepId) -> str:
    """Graph node name for a step; state keys such as "validation" are taken."""
    return f"{step.value}_stage"


def create_customization_graph(
    llm_provider: LLMProvider | None,
    progress: ProgressChannel | None = None,
    api_key: str | None = None,
    max_document_bytes: int | None = None,
    stages: Sequence[StageDescriptor] = STAGES,
):
    """Create and compile the CV customization workflow graph.

    Args:
        llm_provider: The LLM provider for every generation stage.
        progress: Channel receiving progress updates.
        api_key: API key of the provider, checked by the validation stage.
        max_document_bytes: Upload size limit.
        stages: Stage table to build from.

    Returns:
        Compiled StateGraph.

    Raises:
        ValueError: If the stage table cannot run in order.
    """
    validate_stage_order(stages)
    nodes = create_nodes(
        llm_provider,
        progress=progress,
        api_key=api_key,
        max_document_bytes=max_document_bytes,
    )

    workflow = StateGraph(CustomizationState)
    for stage in stages:
        workflow.add_node(node_name(stage.step), nodes[stage.step])

    workflow.add_edge(START, node_name(stages[0].step))
    for current, following in zip(stages, stages[1:]):
        router = (
            should_continue_after_file_processing
            if current.step == StepId.FILE_PROCESSING
            else should_continue
        )
        workflow.add_conditional_edges(
            node_name(current.step),
            router,
            {"continue": node_name(following.step), "error": END},
        )
    workflow.add_edge(node_name(stages[-1].step), END)

    return workflow.compile()


def initial_state(
    cv: Upload | None,
    requirement_docs: Sequence[Upload],
    provider: str,
    model: str,
) -> CustomizationState:
    return {
        "cv_upload": cv,
        "requirement_uploads": list(requirement_docs),
        "provider": provider,
        "model": model,
        "cv_document": None,
        "requirement_documents": [],
        "language": None,
        "customer_requirements": None,
        "profile_customization": None,
        "key_competencies": None,
        "customized_projects": None,
        "evaluation": None,
        "validation": None,
        "profile_correction": None,
        "competencies_correction": None,
        "projects_correction": None,
        "correction": None,
        "result": None,
        "last_progress": 0.0,
        "step_timings": [],
        "total_time": None,
        "current_step": "start",
        "errors": [],
        "failed_step": None,
        "failure_kind": None,
        "failure_cause": None,
    }


def run_cv_customization(
    cv: Upload | None,
    requirement_docs: Sequence[Upload],
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    progress: ProgressChannel | None = None,
) -> CustomizationState:
    """Run the CV customization workflow.

    Args:
        cv: CV file content and filename.
        requirement_docs: Customer requirement files (content, filename), in order.
        provider: LLM provider name. Defaults to the configured provider.
        model: Model name. Defaults to the configured model, or the provider's
            first catalog model when a different provider is chosen.
        api_key: API key for the provider. Defaults to the configured key.
        progress: Channel receiving progress updates, one at a time.

    Returns:
        Final workflow state. ``result`` holds the CustomizationResult on
        success; ``errors``, ``failed_step``, ``failure_kind`` and
        ``failure_cause`` describe a failure.
    """
    settings = get_settings()
    provider = provider or settings.provider
    if model is None:
        if provider == settings.provider:
            model = settings.model
        else:
            model = default_model(provider, pdf_only=False).model
    api_key = api_key or settings.api_key_for(provider)

    llm_provider = None
    if provider in get_args(ProviderName):
        llm_provider = get_llm_provider(
            provider, model, api_key, timeout=settings.request_timeout
        )

    graph = create_customization_graph(
        llm_provider,
        progress=progress,
        api_key=api_key,
        max_document_bytes=settings.max_document_bytes,
    )

    start_time = time.time()
    final_state = graph.invoke(initial_state(cv, requirement_docs, provider, model))
    final_state["total_time"] = time.time() - start_time

    result = final_state.get("result")
    if result is not None and not final_state.get("errors"):
        logger.info(
            "CV customization completed in %.1fs (score %s/10, corrected: %s)",
            final_state["total_time"],
            result.evaluation.overall_score,
            result.correction is not None,
        )
        emit_progress(
            progress,
            StepId.COMPLETE,
            "completed",
            "CV customization completed successfully!",
            COMPLETE_PROGRESS,
            data=result,
        )
    else:
        logger.warning(
            "CV customization stopped at %s: %s",
            final_state.get("failed_step"),
            "; ".join(final_state.get("errors", [])),
        )
    return final_state
