"""LangGraph workflow for CV customization."""

from cv_customizer.graph.stages import STAGES, StageDescriptor, validate_stage_order
from cv_customizer.graph.workflow import create_customization_graph, run_cv_customization

__all__ = [
    "STAGES",
    "StageDescriptor",
    "create_customization_graph",
    "run_cv_customization",
    "validate_stage_order",
]
