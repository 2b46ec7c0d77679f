"""Upload components for the CV and the customer requirement documents."""

import streamlit as st

Upload = tuple[bytes, str]


def _size_label(size: int) -> str:
    if size < 1024 * 1024:
        return f"{size / 1024:.0f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _to_upload(uploaded_file, max_bytes: int) -> Upload:
    """Read an uploaded file, warning about files the pipeline will reject."""
    content = uploaded_file.getvalue()
    if not content:
        st.warning(f"{uploaded_file.name} is empty and will be rejected.")
    elif len(content) > max_bytes:
        st.warning(
            f"{uploaded_file.name} is {_size_label(len(content))}, "
            f"above the {_size_label(max_bytes)} limit."
        )
    return content, uploaded_file.name


def render_cv_upload(max_bytes: int) -> Upload | None:
    """Render the CV uploader.

    Returns:
        The CV as (content, filename), or None before a file is chosen.
    """
    st.subheader("Your CV")
    uploaded = st.file_uploader(
        "Upload your CV",
        type=["pdf"],
        key="cv_file",
        help="The CV is sent to the model as a PDF document; nothing is extracted locally.",
    )
    if uploaded is None:
        st.caption("PDF, up to " + _size_label(max_bytes))
        return None

    upload = _to_upload(uploaded, max_bytes)
    st.caption(f"{uploaded.name} ({_size_label(len(upload[0]))})")
    return upload


def render_requirements_upload(max_bytes: int) -> list[Upload]:
    """Render the uploader for customer requirement documents.

    Returns:
        Uploaded documents as (content, filename), in upload order.
    """
    st.subheader("Customer Requirements")
    uploaded_files = st.file_uploader(
        "Upload requirement documents",
        type=["pdf"],
        accept_multiple_files=True,
        key="requirement_files",
        help="Tender documents, job descriptions or any other customer requirements.",
    )
    if not uploaded_files:
        st.caption("One or more PDFs")
        return []

    uploads = [_to_upload(file, max_bytes) for file in uploaded_files]
    for content, name in uploads:
        st.caption(f"{name} ({_size_label(len(content))})")
    return uploads
