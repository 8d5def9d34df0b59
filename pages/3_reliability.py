"""Step 3: Reliability Statistics."""

import streamlit as st

from irr_core.cohen import approximate_cohens_kappa, cohens_kappa
from irr_core.errors import ReliabilityError
from irr_core.krippendorff import coincidence_matrix, krippendorff_alpha
from irr_core.kupper_hafner import kupper_hafner_inferred, kupper_hafner_reference
from irr_core.models import summaries_to_dataframe
from irr_core.report import interpret_coefficient, results_summary
from irr_charts.charts import color_by_coefficient, plot_coincidence_matrix, plot_statistics

st.set_page_config(page_title="Reliability - Coding Assistant", layout="wide")

st.title("Step 3: Compute Reliability")

state = st.session_state.app_state
if not state.get('workbook') or not state.get('sheet_name'):
    st.warning("Please choose a coding sheet on the Workbook page first.")
    st.stop()

if len(state['rater_columns']) < 2:
    st.warning("Select at least two coder columns on the Workbook page.")
    st.stop()

with st.expander("What will be calculated?"):
    st.markdown("""
    - **Cohen's Kappa** - two coders, exactly one code per cell
    - **(fake) Cohen's Kappa** - an approximate generalization to cells with several codes; not a published statistic
    - **Kupper-Hafner concordance** - two coders, sets of codes; flags from the codebook are excluded
    - **Kupper-Hafner (inferred codebook)** - same, using every code in the range as the codebook
    - **Krippendorff's Alpha** - two or more coders, one code per cell, empty cells treated as missing
    """)

statistics = {
    "Cohen's Kappa": lambda cells, wb, q: cohens_kappa(cells),
    "(fake) Cohen's Kappa": lambda cells, wb, q: approximate_cohens_kappa(cells),
    "Kupper-Hafner concordance": lambda cells, wb, q: kupper_hafner_reference(cells, wb.load_codebook(q)),
    "Kupper-Hafner (inferred codebook)": lambda cells, wb, q: kupper_hafner_inferred(cells),
    "Krippendorff's Alpha": lambda cells, wb, q: krippendorff_alpha(cells),
}

selected = st.multiselect("Statistics", options=list(statistics), default=["Krippendorff's Alpha"])

if st.button("Run analysis", type="primary"):
    workbook = state['workbook']
    try:
        cells = workbook.coded_range(state['sheet_name'], state['rater_columns'])
    except ReliabilityError as e:
        st.error(str(e))
        st.stop()

    summaries = []
    for name in selected:
        try:
            summaries.append(statistics[name](cells, workbook, state['question_id']))
        except ReliabilityError as e:
            st.error(f"{name}: {e}")
    state['summaries'] = summaries

    try:
        state['coincidence_matrix'] = coincidence_matrix(cells)
    except ReliabilityError:
        state['coincidence_matrix'] = None

summaries = state.get('summaries')
if summaries:
    cols = st.columns(len(summaries))
    for col, s in zip(cols, summaries):
        with col:
            interp, color = interpret_coefficient(s.coefficient)
            st.metric(s.statistic, f"{s.coefficient:.3f}")
            st.markdown(f"**Status:** :{color}[{interp}]")

    st.plotly_chart(plot_statistics(summaries), use_container_width=True)

    df = summaries_to_dataframe(summaries)
    st.dataframe(df.style.map(color_by_coefficient, subset=["coefficient"]), use_container_width=True, hide_index=True)

    with st.expander("Text summary"):
        st.code(results_summary(summaries, state.get('conflicts')))

if state.get('coincidence_matrix') is not None:
    st.subheader("Coincidence Matrix")
    st.plotly_chart(plot_coincidence_matrix(state['coincidence_matrix']), use_container_width=True)
