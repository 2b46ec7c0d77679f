"""Conditional edge functions for LangGraph workflow."""

from typing import Literal

from cv_customizer.models.state import CustomizationState


def should_continue(state: CustomizationState) -> Literal["continue", "error"]:
    """Stop the run as soon as any stage has recorded an error.

    Args:
        state: Current workflow state.

    Returns:
        "continue" if no errors, "error" otherwise.
    """
    if state.get("errors") or state.get("failed_step"):
        return "error"
    return "continue"


def should_continue_after_file_processing(
    state: CustomizationState,
) -> Literal["continue", "error"]:
    """Check that file processing loaded every document."""
    if should_continue(state) == "error":
        return "error"
    if state.get("cv_document") is None or not state.get("requirement_documents"):
        return "error"
    return "continue"
