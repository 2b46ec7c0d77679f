#!/usr/bin/env python3
"""Check API keys for all supported LLM providers.

Keys are read from the environment and .env.local. Each configured key is
validated with a short request to the provider's first catalog model.

Usage:
    python scripts/check_api_keys.py           # Check all configured keys
    python scripts/check_api_keys.py mistral   # Check only Mistral
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dotenv import load_dotenv  # noqa: E402

load_dotenv(project_root / ".env.local")

from typing import get_args  # noqa: E402

from cv_customizer.config import ProviderName, get_settings  # noqa: E402
from cv_customizer.llm.base import get_llm_provider  # noqa: E402
from cv_customizer.llm.catalog import default_model  # noqa: E402

PROVIDERS: tuple[str, ...] = get_args(ProviderName)


def check_key(provider: str, api_key: str | None = None) -> tuple[bool, str]:
    """Validate one provider's API key.

    Args:
        provider: Provider name.
        api_key: Key to check. Defaults to the configured key.

    Returns:
        Tuple of (success, message).
    """
    api_key = api_key or get_settings().api_key_for(provider)
    if not api_key:
        return False, "Not configured"

    try:
        model = default_model(provider, pdf_only=False).model
        llm = get_llm_provider(provider, model, api_key, timeout=30.0)
        response = llm.get_extraction_model().invoke("Say 'OK' if you can hear me.")
        return True, f"{model} responded: {str(response.content)[:50]}"
    except Exception as e:
        return False, f"Validation failed: {e}"


def check_all_keys() -> dict[str, tuple[bool, str]]:
    print("=" * 60)
    print("CV Customizer - API Key Validation")
    print("=" * 60)

    results = {}
    for provider in PROVIDERS:
        if get_settings().is_provider_available(provider):
            print(f"Checking {provider} API key...")
        results[provider] = check_key(provider)
    print()
    return results


def print_results(results: dict[str, tuple[bool, str]]) -> int:
    """Print check results and return the exit code."""
    print("Results:")
    print("-" * 60)

    configured = {p: r for p, r in results.items() if r[1] != "Not configured"}
    for provider, (success, message) in results.items():
        icon = "[OK]" if success else "[X]"
        print(f"  {icon} {provider.upper():12} {message}")
    print("-" * 60)

    if not configured:
        print("\nNo API keys configured. Add keys to .env.local:")
        print("  OPENAI_API_KEY=sk-...")
        print("  ANTHROPIC_API_KEY=sk-ant-...")
        print("  MISTRAL_API_KEY=...")
        print("  GOOGLE_API_KEY=...")
        return 1

    if all(success for success, _ in configured.values()):
        print("\nAll configured API keys are valid!")
        return 0
    print("\nSome API keys failed validation. Check the errors above.")
    return 1


def main():
    if len(sys.argv) > 1:
        provider = sys.argv[1].lower()
        if provider not in PROVIDERS:
            print(f"Unknown provider: {provider}")
            print(f"Valid options: {', '.join(PROVIDERS)}")
            sys.exit(1)
        success, message = check_key(provider)
        print(f"{provider}: {'PASS' if success else 'FAIL'} - {message}")
        sys.exit(0 if success else 1)

    sys.exit(print_results(check_all_keys()))


if __name__ == "__main__":
    main()
