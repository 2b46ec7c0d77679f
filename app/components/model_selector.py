"""Provider and model selection for the sidebar."""

import sys
from pathlib import Path
from typing import NamedTuple

import streamlit as st

from cv_customizer.config import Settings
from cv_customizer.llm.catalog import ModelOption, available_models

PROVIDER_LABELS = {
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "mistral": "Mistral",
    "google": "Google",
}


class ModelSelection(NamedTuple):
    provider: str
    model: str
    api_key: str | None


def model_label(option: ModelOption) -> str:
    label = f"{option.display_name} ({PROVIDER_LABELS.get(option.provider, option.provider)})"
    if not option.supports_pdf:
        label += " - text only"
    return label


def selectable_models(
    show_text_only: bool, provider: str | None = None
) -> list[ModelOption]:
    """Catalog models to offer, optionally limited to one provider."""
    options = available_models(pdf_only=not show_text_only)
    if provider:
        options = [option for option in options if option.provider == provider]
    return options


def _render_key_check(provider: str, api_key: str) -> None:
    if not st.button("Test API Key", key="test_api_key"):
        return
    with st.spinner(f"Testing {PROVIDER_LABELS[provider]} API key..."):
        sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))
        from check_api_keys import check_key

        success, message = check_key(provider, api_key)
    if success:
        st.success(message)
    else:
        st.error(message)


def render_model_selector(settings: Settings) -> ModelSelection | None:
    """Render provider and model selection with the API key status.

    Returns:
        The selection, or None when no model matches the filters.
    """
    st.title("AI Model")

    show_text_only = st.checkbox(
        "Show text-only models",
        value=False,
        help="Text-only models cannot read the uploaded PDFs; runs with them are rejected.",
        key="show_text_only",
    )
    provider_filter = st.selectbox(
        "Provider",
        options=["all", *PROVIDER_LABELS],
        format_func=lambda p: "All providers" if p == "all" else PROVIDER_LABELS[p],
        key="provider_filter",
    )

    provider = None if provider_filter == "all" else provider_filter
    options = selectable_models(show_text_only, provider)
    if not options:
        st.warning("No model of this provider can read PDF documents.")
        return None

    default_index = next(
        (
            i
            for i, option in enumerate(options)
            if option.provider == settings.provider and option.model == settings.model
        ),
        0,
    )
    option = st.selectbox(
        "Model",
        options=options,
        index=default_index,
        format_func=model_label,
        key="model_option",
    )

    env_api_key = settings.api_key_for(option.provider)
    if env_api_key:
        st.success(f"{PROVIDER_LABELS[option.provider]} API key loaded from environment")
        _render_key_check(option.provider, env_api_key)
        api_key = None
    else:
        api_key = st.text_input(
            f"{PROVIDER_LABELS[option.provider]} API Key",
            type="password",
            help="Enter your API key (or set it in .env.local)",
        ) or None

    return ModelSelection(option.provider, option.model, api_key or env_api_key)
