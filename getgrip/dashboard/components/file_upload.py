"""File upload widget backed by an UploadField.

Selected files are sent only when the Upload button is pressed, so a
Streamlit rerun never re-uploads the same selection.
"""

import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.shared.domain.uploads.coordinator import UploadField, UploadFile, UploadMode
from getgrip.shared.infrastructure.api.endpoints import public_url

PREVIEW_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".svg")


def file_upload(
    field: UploadField,
    label: str,
    key: str,
    accept: list[str],
    uploads_base_url: str,
) -> None:
    """Render the current URLs with remove buttons and, when allowed, the drop zone."""
    st.markdown(f"**{label}**")

    urls = field.urls
    if urls:
        cols = st.columns(min(len(urls), 4))
        for index, url in enumerate(urls):
            with cols[index % len(cols)]:
                if url.lower().endswith(PREVIEW_EXTENSIONS):
                    st.image(public_url(uploads_base_url, url), width=140)
                else:
                    st.markdown(f"[{url.rsplit('/', 1)[-1]}]({public_url(uploads_base_url, url)})")
                if st.button("✕ Remove", key=f"{key}_remove_{index}"):
                    field.remove(index)
                    st.rerun()
        if len(urls) > 1 and st.button("Clear all", key=f"{key}_clear"):
            field.clear()
            st.rerun()

    error_key = f"{key}_error"
    if st.session_state.get(error_key):
        st.error(st.session_state[error_key])

    if not field.show_upload_zone:
        return

    nonce_key = f"{key}_nonce"
    nonce = st.session_state.get(nonce_key, 0)
    multiple = field.mode is UploadMode.MULTIPLE
    picked = st.file_uploader(
        f"Drop {'files' if multiple else 'a file'} here or browse",
        type=accept,
        accept_multiple_files=multiple,
        key=f"{key}_uploader_{nonce}",
        help=f"Max size: {field.coordinator.max_size_mb}MB",
    )
    if not picked:
        return

    selection = picked if isinstance(picked, list) else [picked]
    if st.button(f"⬆️ Upload {len(selection)} file(s)", key=f"{key}_upload_{nonce}"):
        files = [
            UploadFile(f.name, f.getvalue(), f.type or "application/octet-stream")
            for f in selection
        ]
        with st.spinner("Uploading..."):
            outcome = run_async(field.upload(files))
        st.session_state[error_key] = outcome.error
        # a fresh uploader key empties the selection
        st.session_state[nonce_key] = nonce + 1
        st.rerun()
