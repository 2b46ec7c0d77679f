"""Custom styles for the CV Customizer Streamlit UI."""

import streamlit as st

FONT_LINKS = """
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
"""

APP_CSS = """
<style>
    html, body, [class*="st-"], .stMarkdown, [data-testid="stSidebar"] * {
        font-family: 'Inter', sans-serif;
    }

    /* Code blocks keep monospace */
    code, pre, .stCode, code *, pre * {
        font-family: 'JetBrains Mono', 'Fira Code', 'Consolas', monospace !important;
    }

    .header-tagline {
        font-size: 1.15rem;
        color: #666;
        margin: 0;
        font-weight: 400;
    }
    @media (prefers-color-scheme: dark) {
        .header-tagline {
            color: #a0a0a0;
        }
    }

    .timing-display {
        font-family: monospace;
        font-size: 1.1rem;
        color: #0066cc;
        padding: 0.5rem;
        background: #f0f8ff;
        border-radius: 4px;
        margin-top: 0.5rem;
    }
    .timing-display.failed {
        background: #fff0f0;
        color: #cc0000;
    }

    /* Step checklist */
    .step-checklist {
        font-size: 0.95rem;
        line-height: 1.6;
    }
    .step-summary {
        color: #6c757d;
        font-weight: 400;
        font-size: 0.85rem;
    }
    .step-spinner {
        display: inline-block;
        animation: rotate 1s linear infinite;
        color: #007bff;
    }
    @keyframes rotate {
        from { transform: rotate(0deg); }
        to { transform: rotate(360deg); }
    }
</style>
"""


def apply_custom_styles() -> None:
    """Load the font and the app CSS. Call once, right after set_page_config."""
    st.markdown(FONT_LINKS, unsafe_allow_html=True)
    st.markdown(APP_CSS, unsafe_allow_html=True)
