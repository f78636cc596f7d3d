import streamlit as st
from healthdiary.config import get_diagnostics
from healthdiary.ui.session import end_session, guard_page
from healthdiary.ui.theme import load_css

load_css()
ctx = guard_page("/settings")

st.title("Settings ⚙️")

st.subheader("Profile")
st.write(f"**Name:** {ctx.identity.display_name or '—'}")
st.write(f"**Email:** {ctx.identity.email}")

st.divider()

st.subheader("Diagnostics")
diag = get_diagnostics()
st.json(diag)

st.divider()

if st.button("Logout"):
    end_session()
    st.switch_page("app.py")
