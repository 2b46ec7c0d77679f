"""Common call boundary for stage agents."""

import logging
from typing import TypeVar

from langchain_core.exceptions import OutputParserException
from pydantic import BaseModel, ValidationError

from cv_customizer.agents.errors import CriterionFailed, FailureKind, StageAgentFailure
from cv_customizer.llm.base import LLMProvider
from cv_customizer.prompts.base import StagePrompt

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

SCHEMA_ERRORS = (ValidationError, OutputParserException)


class StageAgent:
    """Base class for agents that make exactly one structured generation call.

    Subclasses set ``failure`` to their stage failure type and call
    ``_generate`` once per invocation.
    """

    failure: type[StageAgentFailure] | type[CriterionFailed]
    creative: bool = False

    def __init__(self, llm_provider: LLMProvider):
        self.llm_provider = llm_provider

    def _generate(self, prompt: StagePrompt, output_schema: type[T]) -> T:
        try:
            return self.llm_provider.generate_structured(
                prompt, output_schema, creative=self.creative
            )
        except SCHEMA_ERRORS as e:
            logger.exception("%s: invalid %s output", type(self).__name__, output_schema.__name__)
            raise self.failure(FailureKind.SCHEMA) from e
        except Exception as e:
            logger.exception("%s: generation call failed", type(self).__name__)
            raise self.failure(FailureKind.PROVIDER) from e

    def _contract_violation(self, detail: str) -> StageAgentFailure | CriterionFailed:
        """Failure for output that parsed but broke a stage post-condition."""
        logger.error("%s: %s", type(self).__name__, detail)
        return self.failure(FailureKind.SCHEMA)
