from datetime import date

import streamlit as st

from ..services.journal import preview_text
from ..services.stats import MOODS
from .theme import SCORE_COLORS, mood_color


def stat_card(title, value, caption=""):
    st.markdown(
        f"""
        <div class="hd-card">
            <h4>{title}</h4>
            <h2>{value}</h2>
            <p>{caption}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def mood_badge(mood):
    if not mood:
        return ""
    return f'<span class="hd-badge" style="background:{mood_color(mood)}">{mood}</span>'


def overview_cards(overview):
    cols = st.columns(4)
    for col, card in zip(cols, overview.cards()):
        with col:
            caption = "All time" if card["title"] == "Total Entries" else "Last 7 days average"
            stat_card(card["title"], card["value"], caption)


def health_score_card(score, band):
    st.markdown(
        f"""
        <div class="hd-card">
            <div class="hd-score" style="color:{SCORE_COLORS[band]}">{score}</div>
            <p style="text-align:center">Health Score</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def entry_form(entry=None, key="entry_form"):
    """Render the health entry form. Returns the field dict on submit, else None."""
    with st.form(key):
        entry_date = st.date_input("Date", value=getattr(entry, "entry_date", None) or date.today())
        current = getattr(entry, "mood", None) or "neutral"
        mood = st.selectbox("Mood", MOODS, index=MOODS.index(current) if current in MOODS else MOODS.index("neutral"))
        col1, col2, col3 = st.columns(3)
        sleep = col1.number_input("Sleep (hours)", 0.0, 24.0, float(getattr(entry, "sleep_hours", None) or 7.0), step=0.5)
        water = col2.number_input("Water (glasses)", 0.0, 40.0, float(getattr(entry, "water_intake", None) or 0.0), step=1.0)
        exercise = col3.number_input("Exercise (mins)", 0, 1440, int(getattr(entry, "exercise_minutes", None) or 0))
        symptoms = st.text_input("Symptoms", value=getattr(entry, "symptoms", None) or "")
        notes = st.text_area("Notes", value=getattr(entry, "notes", None) or "")

        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Save")
        cancelled = c2.form_submit_button("Cancel")

    if cancelled:
        return "cancel"
    if submitted:
        return {
            "entry_date": entry_date,
            "mood": mood,
            "sleep_hours": sleep,
            "water_intake": water,
            "exercise_minutes": exercise,
            "symptoms": symptoms,
            "notes": notes,
        }
    return None


def entry_list(entries, on_edit, on_delete):
    if not entries:
        st.info("No health entries yet. Start tracking your health with a new entry.")
        return
    for entry in entries:
        with st.container(border=True):
            cols = st.columns([5, 1, 1])
            with cols[0]:
                st.markdown(
                    f"**{entry.entry_date:%a, %b %d %Y}** &nbsp; {mood_badge(entry.mood)}",
                    unsafe_allow_html=True,
                )
                st.caption(
                    f"{entry.sleep_hours or 0}h sleep • {entry.water_intake or 0} glasses • "
                    f"{entry.exercise_minutes or 0}m exercise"
                )
                if entry.symptoms:
                    st.write(f"Symptoms: {entry.symptoms}")
                if entry.notes:
                    st.write(entry.notes)
            if cols[1].button("Edit", key=f"edit_{entry.id}"):
                on_edit(entry)
            if cols[2].button("Delete", key=f"delete_{entry.id}"):
                on_delete(entry)


def journal_entry_card(entry):
    with st.container(border=True):
        st.markdown(
            f"**{entry.title or 'Untitled Entry'}** &nbsp; {mood_badge(entry.mood)}",
            unsafe_allow_html=True,
        )
        st.write(preview_text(entry.content))
        created = f"{entry.created_at:%b %d %Y}" if entry.created_at else ""
        st.caption(f"{entry.word_count} words • {entry.reading_time} min read • {created}")
