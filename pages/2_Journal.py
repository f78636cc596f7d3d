import streamlit as st
from healthdiary.db import SessionLocal
from healthdiary.exceptions import StoreError
from healthdiary.logging_config import get_logger
from healthdiary.services.journal import (
    add_journal_entry,
    create_journal,
    delete_journal,
    delete_journal_entry,
    list_journal_entries,
    list_journals,
    rename_journal,
    update_journal_entry,
)
from healthdiary.services.stats import MOODS
from healthdiary.ui.components import journal_entry_card
from healthdiary.ui.session import guard_page
from healthdiary.ui.theme import load_css

logger = get_logger("healthdiary.pages.journal")

load_css()
ctx = guard_page("/journal")

st.title("Journal 📔")
st.caption("This is your private space. Write freely.")

user_id = ctx.user_id
db = SessionLocal()
try:
    journals = list_journals(user_id, db)

    with st.expander("➕ New journal", expanded=not journals):
        with st.form("new_journal_form"):
            name = st.text_input("Name")
            description = st.text_input("Description (optional)")
            if st.form_submit_button("Create"):
                create_journal(user_id, name, db, description=description or None)
                st.toast("Journal created ✅")
                st.rerun()

    if not journals:
        st.info("No journals yet. Create one to start writing.")
        st.stop()

    names = {j.id: j.name for j in journals}
    journal_id = st.selectbox("Journal", list(names), format_func=names.get)
    journal = next(j for j in journals if j.id == journal_id)
    if journal.description:
        st.caption(journal.description)

    with st.form("journal_entry_form", clear_on_submit=True):
        title = st.text_input("Title")
        content = st.text_area("What's on your mind?", height=200)
        mood = st.selectbox("Mood (optional)", [""] + MOODS)
        if st.form_submit_button("Save entry"):
            if not content.strip():
                st.warning("Write something first.")
            else:
                entry = add_journal_entry(user_id, journal_id, title, content, db, mood=mood or None)
                st.success(f"Entry saved! {entry.word_count} words ✅")

    st.divider()
    entries = list_journal_entries(journal_id, db)
    if not entries:
        st.write("No entries in this journal yet.")
    for entry in entries:
        journal_entry_card(entry)
        with st.expander("Edit entry"):
            with st.form(f"edit_je_form_{entry.id}"):
                new_title = st.text_input("Title", value=entry.title or "", key=f"je_title_{entry.id}")
                new_content = st.text_area("Content", value=entry.content or "", height=150, key=f"je_content_{entry.id}")
                mood_options = [""] + MOODS
                new_mood = st.selectbox(
                    "Mood (optional)",
                    mood_options,
                    index=mood_options.index(entry.mood) if entry.mood in MOODS else 0,
                    key=f"je_mood_{entry.id}",
                )
                if st.form_submit_button("Update entry"):
                    update_journal_entry(user_id, entry.id, db, title=new_title, content=new_content, mood=new_mood)
                    st.toast("Entry updated ✅")
                    st.rerun()
        if st.button("Delete entry", key=f"del_je_{entry.id}"):
            delete_journal_entry(user_id, entry.id, db)
            st.rerun()

    st.divider()
    with st.expander("Rename this journal"):
        with st.form("rename_journal_form"):
            new_name = st.text_input("Name", value=journal.name, key=f"rename_journal_name_{journal_id}")
            new_description = st.text_input("Description", value=journal.description or "", key=f"rename_journal_description_{journal_id}")
            if st.form_submit_button("Save"):
                rename_journal(user_id, journal_id, new_name, db, description=new_description)
                st.toast("Journal renamed ✅")
                st.rerun()

    if st.button("Delete this journal", key="btn_delete_journal"):
        delete_journal(user_id, journal_id, db)
        st.rerun()
except StoreError as e:
    logger.exception("Journal page failed for user %s", user_id)
    st.error(f"Something went wrong: {e}")
finally:
    db.close()
