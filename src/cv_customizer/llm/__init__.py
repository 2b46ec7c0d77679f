"""LLM provider abstraction."""

from cv_customizer.llm.base import LLMProvider, get_llm_provider
from cv_customizer.llm.catalog import MODEL_OPTIONS, ModelOption

__all__ = ["MODEL_OPTIONS", "LLMProvider", "ModelOption", "get_llm_provider"]
