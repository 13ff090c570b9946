# Run from project root: streamlit run studio/ui.py
# UI talks to the backend proxy (POST /api/gemini) through studio.client. Tools are shown to admins only.

import os
import sys
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import streamlit as st

from studio.client import (
    GeminiProxyError,
    analyze_field_photo,
    edit_impact_photo,
    generate_campaign_poster,
    search_charity_trends,
    to_data_uri,
)
from studio.core.config import ADMIN_ROLE, DEFAULT_EDIT_INSTRUCTION, POSTER_SIZES, STUDIO_USER_ROLE
from studio.services.extraction import decode_data_uri

TOOLS = ("generate", "edit", "analyze", "search")

# Access control (presentational only; the proxy holds the credential)
if STUDIO_USER_ROLE != ADMIN_ROLE:
    st.header("Access Restricted")
    st.caption("Only NGO Admins can access the AI Studio.")
    st.stop()

st.title("NGO AI Studio")
st.caption("Use Gemini-powered tools to enhance impact and storytelling.")

if "result" not in st.session_state:
    st.session_state.result = None
if "search_response" not in st.session_state:
    st.session_state.search_response = None


def _reset_results() -> None:
    st.session_state.result = None
    st.session_state.search_response = None


active_tool = st.sidebar.radio(
    "Tool",
    TOOLS,
    format_func=str.capitalize,
    key="active_tool",
    on_change=_reset_results,
)

uploaded = None
if active_tool in ("edit", "analyze"):
    uploaded = st.file_uploader("Upload a photo", type=["png", "jpg", "jpeg", "webp"], key="photo")

prompt = st.text_area("Prompt", placeholder="Enter prompt...", key="prompt")

size = POSTER_SIZES[0]
if active_tool == "generate":
    size = st.radio("Size", POSTER_SIZES, horizontal=True, key="size")

needs_file = active_tool in ("edit", "analyze")
if st.button("Run", disabled=needs_file and uploaded is None):
    _reset_results()
    if active_tool == "generate":
        if prompt.strip():
            with st.spinner("Processing..."):
                try:
                    st.session_state.result = generate_campaign_poster(prompt, size).get("image")
                except GeminiProxyError:
                    st.error("Poster generation failed.")
    elif active_tool == "search":
        if prompt.strip():
            with st.spinner("Processing..."):
                try:
                    st.session_state.search_response = search_charity_trends(prompt)
                except GeminiProxyError:
                    st.error("Search failed.")
    elif uploaded is not None:
        with st.spinner("Processing..."):
            try:
                image_uri = to_data_uri(uploaded.getvalue(), uploaded.type)
                if active_tool == "edit":
                    data = edit_impact_photo(image_uri, prompt or DEFAULT_EDIT_INSTRUCTION)
                    st.session_state.result = data.get("image")
                else:
                    st.session_state.result = analyze_field_photo(image_uri).get("text")
            except GeminiProxyError:
                st.error("Image operation failed.")

# Results
search_response = st.session_state.search_response
result = st.session_state.result
if search_response:
    st.divider()
    st.markdown(search_response.get("text", ""))
    sources = search_response.get("sources") or []
    if sources:
        st.caption("Sources:")
        for s in sources:
            st.caption(f"  • [{s.get('title') or s.get('uri')}]({s.get('uri')})")
elif result:
    st.divider()
    if result.startswith("data:image"):
        st.image(decode_data_uri(result), caption="Result")
    else:
        st.text(result)
