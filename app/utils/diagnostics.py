"""Turn pipeline errors into user-facing explanations."""

from cv_customizer.agents.errors import FailureKind
from cv_customizer.graph.nodes import INPUT_FAILURE


def format_elapsed_time(seconds: float) -> str:
    """Format elapsed time in a human-readable way."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    secs = seconds % 60
    return f"{minutes}m {secs:.0f}s"


def _details(category, title, explanation, cause, solution, technical) -> dict:
    return {
        "category": category,
        "title": title,
        "explanation": explanation,
        "cause": cause,
        "solution": solution,
        "technical": technical,
    }


def parse_error_details(
    error_message: str,
    provider: str,
    model: str,
    failure_kind: str | None = None,
) -> dict:
    """Parse an error message and return diagnostic information.

    Args:
        error_message: Error text recorded by the pipeline.
        provider: Provider of the run.
        model: Model of the run.
        failure_kind: ``failure_kind`` of the final state, when known.

    Returns dict with:
        - category: input, schema, connection, auth, rate_limit, model,
          context, server or unknown
        - title: Short error title
        - explanation: What went wrong
        - cause: Likely cause
        - solution: How to fix it
        - technical: Technical details for debugging
    """
    error_lower = error_message.lower()
    provider_title = provider.title()

    if failure_kind == INPUT_FAILURE:
        return _details(
            "input",
            "Invalid Input",
            error_message,
            "The uploaded files or the selected model cannot be used for this run.",
            [
                "Upload your CV and at least one requirement document as PDF",
                "Check that no file is empty or larger than the upload limit",
                "Pick a model that accepts PDF documents",
            ],
            error_message,
        )

    if failure_kind == FailureKind.SCHEMA.value:
        return _details(
            "schema",
            "Unexpected Model Output",
            f"{error_message}: the model answered, but not in the expected structure.",
            "Some models occasionally return incomplete or malformed structured output.",
            [
                "Try again - structured output failures are often transient",
                "Try a larger model from the same provider",
            ],
            error_message,
        )

    if any(x in error_lower for x in ["connection", "connect", "network", "timeout", "timed out"]):
        return _details(
            "connection",
            "Connection Error",
            f"Could not connect to the {provider_title} API.",
            "Network issues, firewall restrictions, or the API service may be down.",
            [
                "Check your internet connection",
                f"Verify the {provider_title} API status page",
                "Try again in a few moments",
            ],
            error_message,
        )

    if any(
        x in error_lower
        for x in ["api key", "api_key", "authentication", "unauthorized", "401", "invalid key"]
    ):
        return _details(
            "auth",
            "Authentication Failed",
            f"Your {provider_title} API key was rejected.",
            "The API key is missing, invalid, expired, or lacks the required permissions.",
            [
                "Set a valid key in .env.local or enter it in the sidebar",
                "Check that the key has not been revoked",
                "Run scripts/check_api_keys.py to validate all configured keys",
            ],
            error_message,
        )

    if any(x in error_lower for x in ["rate limit", "rate_limit", "429", "quota", "overloaded"]):
        return _details(
            "rate_limit",
            "Rate Limit Exceeded",
            f"Too many requests to the {provider_title} API.",
            "You've hit the provider's rate limit or your usage quota.",
            [
                "Wait a minute and try again",
                "Check your plan's usage limits",
                "Select a different provider",
            ],
            error_message,
        )

    if any(
        x in error_lower
        for x in ["model not found", "model_not_found", "does not exist", "not available"]
    ):
        return _details(
            "model",
            "Model Not Available",
            f"The model '{model}' is not available.",
            "The model name is incorrect or not accessible with your API key.",
            [
                "Select a different model from the dropdown",
                "Verify your API plan includes access to this model",
            ],
            error_message,
        )

    if any(
        x in error_lower for x in ["context length", "token limit", "too long", "maximum context"]
    ):
        return _details(
            "context",
            "Input Too Long",
            "The CV and requirement documents are too long for the model.",
            "The combined documents exceed the model's context window.",
            [
                "Upload fewer or shorter requirement documents",
                "Try a model with a larger context window",
            ],
            error_message,
        )

    if any(
        x in error_lower for x in ["500", "502", "503", "504", "server error", "internal error"]
    ):
        return _details(
            "server",
            "API Server Error",
            f"The {provider_title} API server encountered an error.",
            "Temporary server-side issue.",
            [
                "Wait a moment and try again",
                f"Check {provider_title} status page",
                "Try a different model",
            ],
            error_message,
        )

    return _details(
        "unknown",
        "Processing Error",
        "An unexpected error occurred during CV customization.",
        "Unknown - see technical details below.",
        [
            "Try again",
            "Check your uploaded documents are valid PDFs",
            "Try a different model or provider",
        ],
        error_message,
    )
