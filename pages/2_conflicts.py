"""Step 2: Conflict Resolution."""

import streamlit as st

from irr_core.conflicts import find_conflicts
from irr_core.errors import ReliabilityError
from irr_core.models import conflicts_to_dataframe
from irr_charts.charts import plot_conflict_status

st.set_page_config(page_title="Conflicts - Coding Assistant", layout="wide")

st.title("Step 2: Find Conflicts")

# Check prerequisites
state = st.session_state.app_state
if not state.get('workbook') or not state.get('sheet_name'):
    st.warning("Please choose a coding sheet on the Workbook page first.")
    st.stop()

if len(state['rater_columns']) != 2:
    st.warning("Select exactly two coder columns to look for conflicts.")
    st.stop()

st.markdown("""
Codes both coders used, and flags used by either, go in the **final** column.
Codes only the first coder used are prefixed with `<`, codes only the second
coder used with `>`. Rows with any `<` or `>` left are conflicts.
""")

if st.button("Find conflicts", type="primary"):
    workbook = state['workbook']
    try:
        cells = workbook.coded_range(state['sheet_name'], state['rater_columns'])
        codebook = workbook.load_codebook(state['question_id'])
        state['conflicts'] = find_conflicts(cells, codebook)
    except ReliabilityError as e:
        st.error(str(e))
        st.stop()

conflicts = state.get('conflicts')
if conflicts is not None:
    df = conflicts_to_dataframe(conflicts)

    def highlight_conflict(row):
        color = "background-color: #FFFF00" if row["status"] == "conflict" else ""
        return [color if col == "final" else "" for col in row.index]

    st.plotly_chart(plot_conflict_status(conflicts), use_container_width=True)
    st.dataframe(df.style.apply(highlight_conflict, axis=1), use_container_width=True, hide_index=True)

    st.download_button(
        "Download reconciled column (CSV)",
        df.to_csv(index=False).encode("utf-8"),
        file_name=f"{state['question_id']}_codes_final.csv",
        mime="text/csv",
    )
    state['current_step'] = 3
