"""
UI layer
Purpose: Streamlit-only glue. Renders the sample boxes and results, collects user
inputs, and delegates all work to the controller. Keeps UI concerns (layout/state
widgets) separate from analysis logic so logic can be unit tested without Streamlit.
"""

import streamlit as st

from simcheck import config
from simcheck.controller import AnalysisController
from simcheck.errors import ServiceError, ValidationError
from simcheck.models import EmbeddingSettings, SimilarityResult
from simcheck.services.pricing import PRICE_TABLE, estimate_cost
from simcheck.services.provider import build_embedding_client

config.configure_logging()

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Plagiarism Detector",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ---------------------------
# UI constants
# ---------------------------
PROVIDERS = ["openai", "local"]
OPENAI_MODELS = list(PRICE_TABLE.keys())

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("controller", None)
st_session.setdefault("provider", config.embed_provider())
st_session.setdefault("model", config.EMBED_MODEL)
st_session.setdefault("client_key", None)


# ---------------------------
# Helpers
# ---------------------------
def get_controller():
    """Return the controller object."""
    return st_session.get("controller")


def get_ready_controller():
    """Return controller only if it's initialized and ready."""
    controller = get_controller()
    if not controller:
        return None
    return controller if controller.is_ready() else None


def ensure_controller(provider: str, api_key: str, model: str) -> None:
    """(Re)build the controller when provider, key or model changes."""
    key = (provider, api_key, model)
    if st_session.client_key == key and get_controller():
        return

    settings = EmbeddingSettings(
        model=model if provider == "openai" else config.LOCAL_MODEL,
        timeout=config.REQUEST_TIMEOUT_SEC,
    )
    try:
        embedder = build_embedding_client(
            provider=provider, api_key=api_key, settings=settings
        )
        if provider == "openai":
            embedder.check_credentials()
    except Exception as e:
        st.error(f"Embedding client init failed: {e}")
        st.stop()

    controller = get_controller()
    if controller:
        controller.embedder = embedder
    else:
        st_session.controller = AnalysisController(embedder)
    st_session.client_key = key


def reset_session():
    """Clear samples, results and counters."""
    for key in list(st_session.keys()):
        if str(key).startswith(("label_", "content_")):
            del st_session[key]

    controller = get_controller()
    if controller:
        controller.reset()


def add_text_box():
    get_controller().add_sample()


def remove_text_box(sample_id: str):
    get_controller().remove_sample(sample_id)


def render_result(result: SimilarityResult) -> None:
    """One card per pair: labels, risk badge, score bar, review hint."""
    risk = result.risk
    with st.container(border=True):
        c1, c2 = st.columns([3, 1])
        c1.markdown(f"**{result.labels[0]}** vs **{result.labels[1]}**")
        c2.markdown(f":{risk.color}[**{risk.value}**]")
        st.caption(f"Similarity Score: `{result.percent:.1f}%`")
        st.progress(min(max(result.similarity, 0.0), 1.0))
        if result.needs_review:
            st.warning("Potential plagiarism detected. Manual review recommended.")


# ---------------------------
# SIDEBAR: settings
# ---------------------------
with st.sidebar:
    st.markdown("# Settings")

    st_session.provider = st.radio(
        "Embedding provider",
        PROVIDERS,
        index=PROVIDERS.index(st_session.provider)
        if st_session.provider in PROVIDERS
        else 0,
        horizontal=True,
    )

    user_api_key = ""
    if st_session.provider == "openai":
        st.markdown("## OPEN AI API Key Required")
        user_api_key = st.text_input(
            "Enter your API key",
            type="password",
            value=config.openai_api_key(),
            help="We do not store your key. It stays in your session only.",
        )
        if not user_api_key:
            st.warning("Please enter your API key in the sidebar to continue.")
            st.stop()
        st_session.model = st.selectbox(
            "Model",
            OPENAI_MODELS,
            index=OPENAI_MODELS.index(st_session.model)
            if st_session.model in OPENAI_MODELS
            else 0,
        )
    else:
        st.caption(f"Local model: `{config.LOCAL_MODEL}`")

    ensure_controller(st_session.provider, user_api_key, st_session.model)
    controller = get_ready_controller()
    if not controller:
        st.error("No embedding backend is configured.")
        st.stop()

    st.divider()
    st.markdown("## Usage")
    st.metric("Tokens", controller.tokens_in)
    if controller.model_used:
        cost = estimate_cost(controller.model_used, controller.tokens_in)
        st.metric("Estimated cost", f"${cost:.6f}")

    st.markdown("## Session Controls")
    st.button("Reset session", type="primary", on_click=reset_session)

# ---------------------------
# Header
# ---------------------------
st.title("Plagiarism Detector")
st.caption(
    "Analyze semantic similarity between text samples using AI embeddings "
    "to detect potential plagiarism"
)

left, right = st.columns(2)

with left:
    h1, h2 = st.columns([3, 1])
    h1.subheader("Text Samples")
    h2.button("Add Text", on_click=add_text_box)

    can_remove = len(controller.samples) > 2
    for sample in controller.samples:
        with st.container(border=True):
            c1, c2 = st.columns([5, 1])
            label = c1.text_input(
                "Label",
                value=sample.label,
                key=f"label_{sample.id}",
                label_visibility="collapsed",
            )
            if can_remove:
                c2.button(
                    "🗑️",
                    key=f"remove_{sample.id}",
                    on_click=remove_text_box,
                    args=(sample.id,),
                )
            content = st.text_area(
                "Text",
                value=sample.content,
                key=f"content_{sample.id}",
                placeholder="Enter text to analyze for plagiarism...",
                height=160,
                label_visibility="collapsed",
            )
            controller.update_label(sample.id, label)
            controller.update_content(sample.id, content)
            st.caption(f"{sample.char_count} characters")

    if st.button(
        "Analyze for Plagiarism",
        type="primary",
        use_container_width=True,
        disabled=controller.in_flight,
    ):
        with st.spinner("Analyzing Similarity..."):
            try:
                controller.analyze()
            except (ValidationError, ServiceError) as e:
                st.error(str(e))

with right:
    st.subheader("Similarity Analysis")
    if not controller.results:
        with st.container(border=True):
            st.markdown("### 📊")
            st.write("Run analysis to see similarity results")
    else:
        for result in controller.results:
            render_result(result)

        summary = controller.summary
        with st.container(border=True):
            st.markdown("#### Analysis Summary")
            c1, c2 = st.columns(2)
            c1.metric("High Risk Pairs", summary.high_risk)
            c2.metric("Medium Risk Pairs", summary.medium_risk)
