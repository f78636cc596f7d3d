import streamlit as st
from healthdiary.services.stats import summarize_recent
from healthdiary.ui.components import entry_form, entry_list, overview_cards
from healthdiary.ui.session import get_orchestrator, guard_page, show_notifications
from healthdiary.ui.theme import load_css

load_css()
guard_page("/dashboard/entries")

st.title("Health Log 🩺")

orch = get_orchestrator()
if not orch.loaded:
    orch.reload()

overview = summarize_recent(orch.entries)
overview_cards(overview)
st.caption(f"{overview.total_entries} total entries")

if not orch.dialog.is_open and st.button("➕ New Entry", key="btn_new_entry"):
    orch.dialog.open_new()
    st.rerun()

if orch.dialog.is_open:
    st.subheader("Edit Entry" if orch.dialog.is_edit else "New Entry")
    result = entry_form(orch.dialog.entry, key=f"entry_form_{getattr(orch.dialog.entry, 'id', 'new')}")
    if result == "cancel":
        orch.dialog.cancel()
        st.rerun()
    elif result is not None:
        if orch.submit_dialog(result):
            st.rerun()

st.divider()


def on_edit(entry):
    orch.dialog.open_edit(entry)
    st.rerun()


def on_delete(entry):
    orch.delete(entry.id)
    st.rerun()


entry_list(orch.entries, on_edit=on_edit, on_delete=on_delete)

show_notifications(orch.drain_notifications())
