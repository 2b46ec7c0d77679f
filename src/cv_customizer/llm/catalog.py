"""Static catalog of selectable provider/model pairs."""

from typing import NamedTuple, get_args

from cv_customizer.config import ProviderName


class ModelOption(NamedTuple):
    """One selectable model."""

    provider: ProviderName
    model: str
    display_name: str
    supports_pdf: bool


MODEL_OPTIONS: tuple[ModelOption, ...] = (
    ModelOption("openai", "gpt-4o", "OpenAI GPT-4o", True),
    ModelOption("openai", "o4-mini", "OpenAI o4-mini Reasoning", True),
    ModelOption("anthropic", "claude-sonnet-4-5-20250929", "Anthropic Claude Sonnet 4.5", True),
    ModelOption("anthropic", "claude-3-7-sonnet-20250219", "Anthropic Claude 3.7 Sonnet", True),
    ModelOption("mistral", "mistral-large-latest", "Mistral Large", False),
    ModelOption("mistral", "mistral-medium-latest", "Mistral Medium", False),
    ModelOption("mistral", "mistral-small-latest", "Mistral Small", False),
    ModelOption("google", "gemini-2.5-pro", "Google Gemini 2.5 Pro", True),
)


def available_models(pdf_only: bool = True) -> list[ModelOption]:
    """All models, optionally restricted to those accepting PDF attachments."""
    if pdf_only:
        return [option for option in MODEL_OPTIONS if option.supports_pdf]
    return list(MODEL_OPTIONS)


def models_for_provider(provider: str, pdf_only: bool = True) -> list[ModelOption]:
    return [option for option in available_models(pdf_only) if option.provider == provider]


def default_model(provider: str | None = None, pdf_only: bool = True) -> ModelOption:
    """First model of ``provider`` after filtering, else the first available model.

    Raises:
        ValueError: If the filter leaves no model at all.
    """
    models = available_models(pdf_only)
    if not models:
        raise ValueError("No models available")
    if provider:
        matching = [option for option in models if option.provider == provider]
        if matching:
            return matching[0]
    return models[0]


def find_model(provider: str, model: str) -> ModelOption | None:
    for option in MODEL_OPTIONS:
        if option.provider == provider and option.model == model:
            return option
    return None


def model_choice_errors(provider: str, model: str, api_key: str | None) -> list[str]:
    """Problems with a provider/model choice for runs that attach PDFs."""
    if provider not in get_args(ProviderName):
        return [f"Unknown provider: {provider}"]

    errors = []
    option = find_model(provider, model)
    if option is None:
        errors.append(f"Unknown model for {provider}: {model}")
    elif not option.supports_pdf:
        errors.append(f"{option.display_name} does not support PDF documents")

    if not api_key:
        errors.append(f"{provider} API key is not configured")
    return errors
