"""Streamlit session_state glue for the identity context and entry orchestrator."""

import streamlit as st

from ..auth import SIGN_IN_PATH, SessionContext, route_for
from ..services.entries import EntryOrchestrator

VARIANT_ICONS = {"error": "⚠️", "success": "✅", "info": "ℹ️"}


def get_context() -> SessionContext:
    if "session_context" not in st.session_state:
        ctx = SessionContext()
        ctx.resolve(None)
        st.session_state.session_context = ctx
    return st.session_state.session_context


def get_orchestrator() -> EntryOrchestrator:
    ctx = get_context()
    orch = st.session_state.get("entry_orchestrator")
    if orch is None or orch.context is not ctx:
        orch = EntryOrchestrator(ctx)
        st.session_state.entry_orchestrator = orch
    return orch


def end_session():
    ctx = get_context()
    ctx.sign_out()
    st.session_state.pop("entry_orchestrator", None)


def guard_page(path: str):
    """Stop rendering a protected page for anonymous visitors."""
    ctx = get_context()
    target = route_for(path, ctx.identity)
    if target == SIGN_IN_PATH:
        st.warning("Please sign in first.")
        st.page_link("app.py", label="Go to sign in", icon="🔑")
        st.stop()
    return ctx


def show_notifications(notifications):
    for n in notifications:
        st.toast(f"**{n.title}**: {n.description}", icon=VARIANT_ICONS.get(n.variant, "ℹ️"))
