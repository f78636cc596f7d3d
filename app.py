import streamlit as st
from healthdiary.auth import sign_in, sign_up
from healthdiary.config import LOG_LEVEL
from healthdiary.db import init_db, SessionLocal
from healthdiary.exceptions import AuthenticationError
from healthdiary.logging_config import setup_logging
from healthdiary.services.dashboard import load_dashboard
from healthdiary.services.stats import summarize_recent
from healthdiary.ui.components import entry_list, health_score_card, journal_entry_card, overview_cards, stat_card
from healthdiary.ui.session import end_session, get_context, get_orchestrator, show_notifications
from healthdiary.ui.theme import load_css

st.set_page_config(page_title="Health Diary", page_icon="❤️", layout="wide")

# Init DB on first load
if "db_init" not in st.session_state:
    setup_logging(LOG_LEVEL)
    init_db()
    st.session_state.db_init = True

load_css()

ctx = get_context()

def landing_page():
    st.markdown("<div style='text-align: center; margin-top: 40px;'>", unsafe_allow_html=True)
    st.title("Health Diary ❤️")
    st.subheader("Take control of your mental & physical health")
    st.write(
        "Stress, anxiety, or burnout can quietly shape your life. Log your mood, sleep, water and "
        "movement every day, reflect in your journal, and watch your patterns emerge."
    )
    st.markdown("</div>", unsafe_allow_html=True)

    cols = st.columns(3)
    with cols[0]:
        stat_card("1. Log Your Day", "📅", "Record mood, habits and thoughts in a few taps.")
    with cols[1]:
        stat_card("2. Track Progress", "📈", "See averages and trends across your week.")
    with cols[2]:
        stat_card("3. Find Balance", "✅", "Spot triggers and build lasting routines.")

    sign_in_tab, sign_up_tab = st.tabs(["Sign In", "Sign Up"])

    with sign_in_tab:
        with st.form("sign_in_form"):
            email = st.text_input("Email")
            submitted = st.form_submit_button("Sign In")
        if submitted:
            db = SessionLocal()
            try:
                ctx.resolve(sign_in(email, db))
            except AuthenticationError as e:
                st.error(str(e))
            finally:
                db.close()
            if ctx.identity:
                st.rerun()

    with sign_up_tab:
        with st.form("sign_up_form"):
            email = st.text_input("Email")
            name = st.text_input("Name")
            submitted = st.form_submit_button("Start Your Journey")
        if submitted:
            db = SessionLocal()
            try:
                ctx.resolve(sign_up(email, name, db))
            except AuthenticationError as e:
                st.error(str(e))
            finally:
                db.close()
            if ctx.identity:
                st.rerun()


def edit_entry(entry):
    get_orchestrator().dialog.open_edit(entry)
    st.switch_page("pages/1_Health_Log.py")


def delete_entry(entry):
    get_orchestrator().delete(entry.id)
    st.rerun()


def dashboard():
    top = st.columns([4, 1])
    top[0].markdown(f"### Welcome back, {ctx.identity.label}! 👋")
    if top[1].button("Sign out"):
        end_session()
        st.rerun()

    orch = get_orchestrator()
    if not orch.loaded:
        with st.spinner("Loading your entries..."):
            orch.reload()

    data = load_dashboard(ctx)
    if data.notification:
        show_notifications([data.notification])

    left, right = st.columns([1, 4])
    with left:
        health_score_card(data.stats.health_score, data.stats.band)
    with right:
        cols = st.columns(4)
        with cols[0]:
            stat_card("Health Entries", data.stats.total_health_entries, "Total tracked days")
        with cols[1]:
            stat_card("Journals", data.stats.total_journals, "Active journals")
        with cols[2]:
            stat_card("Journal Entries", data.stats.total_journal_entries, "Written entries")
        with cols[3]:
            stat_card("Streak", data.stats.streak_days, "Days tracked")

    overview_cards(summarize_recent(orch.entries))

    col_a, col_b = st.columns(2)
    with col_a:
        st.subheader("Recent Health Entries")
        entry_list(orch.entries[:3], on_edit=edit_entry, on_delete=delete_entry)
    with col_b:
        st.subheader("Recent Journal Entries")
        if not data.recent_entries:
            st.info("No journal entries yet. Start writing your thoughts.")
        for entry in data.recent_entries[:3]:
            journal_entry_card(entry)

    show_notifications(orch.drain_notifications())


if ctx.identity is None:
    landing_page()
else:
    dashboard()
