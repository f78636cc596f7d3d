import streamlit as st
from healthdiary.services.insights import build_insights, summarize_insights
from healthdiary.services.stats import summarize_dashboard, summarize_recent
from healthdiary.ui.components import health_score_card, stat_card
from healthdiary.ui.session import get_orchestrator, guard_page, show_notifications
from healthdiary.ui.theme import load_css

load_css()
guard_page("/dashboard/insights")

st.title("Insights 📈")

orch = get_orchestrator()
if not orch.loaded:
    orch.reload()

overall = summarize_dashboard(orch.entries)
recent = summarize_recent(orch.entries)

cols = st.columns(4)
with cols[0]:
    health_score_card(overall.health_score, overall.band)
with cols[1]:
    stat_card("Avg Sleep", f"{overall.avg_sleep:.1f}h", "All entries")
with cols[2]:
    stat_card("Total Exercise", f"{overall.total_exercise:.0f}m", "All entries")
with cols[3]:
    stat_card("Avg Mood", f"{overall.avg_mood:.1f}", "1 (terrible) to 5 (excellent)")

st.subheader("This week")
st.write(f"Recent health score: **{recent.health_score}**")

insights = build_insights(orch.entries)
for insight in insights:
    if insight.tone == "warning":
        st.warning(f"**{insight.title}**: {insight.message}")
    elif insight.tone == "success":
        st.success(f"**{insight.title}**: {insight.message}")
    else:
        st.info(f"**{insight.title}**: {insight.message}")

if st.button("Summarize my week ✨", key="btn_summarize"):
    with st.spinner("Thinking..."):
        st.markdown(summarize_insights(insights))

if orch.entries:
    st.subheader("Trends")
    chart_rows = [
        {
            "date": e.entry_date,
            "sleep_hours": e.sleep_hours or 0,
            "water_intake": e.water_intake or 0,
            "exercise_minutes": e.exercise_minutes or 0,
        }
        for e in reversed(orch.entries)
    ]
    st.line_chart(chart_rows, x="date", y=["sleep_hours", "water_intake"])
    st.bar_chart(chart_rows, x="date", y="exercise_minutes")

show_notifications(orch.drain_notifications())
