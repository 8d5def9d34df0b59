"""Step 1: Workbook Upload."""

import streamlit as st

from irr_core.codebook import coding_question
from irr_core.errors import ReliabilityError
from irr_core.workbook import Workbook

st.set_page_config(page_title="Workbook - Coding Assistant", layout="wide")

st.title("Step 1: Upload Your Workbook")

uploaded = st.file_uploader(
    "Upload the XLSX workbook with coding and codebook sheets",
    type=['xlsx'],
)

if uploaded:
    try:
        workbook = Workbook.from_excel(uploaded)
    except Exception as e:
        st.error(f"Could not load workbook: {e}")
        st.stop()

    st.session_state.app_state['workbook'] = workbook
    st.success(f"Loaded {len(workbook.sheet_names)} sheets")

workbook = st.session_state.app_state.get('workbook')
if workbook is None:
    st.stop()

coding_sheets = [name for name in workbook.sheet_names if coding_question(name)]
if not coding_sheets:
    st.warning("No coding sheets found. Name them `<question>_codes` or `<question>_codes_<variant>`.")
    st.stop()

sheet_name = st.selectbox("Coding sheet", options=coding_sheets)
question_id = coding_question(sheet_name)
frame = workbook.sheet(sheet_name)

st.dataframe(frame.head(10), use_container_width=True)

rater_columns = st.multiselect(
    "Coder columns (two for conflicts, Cohen and Kupper-Hafner; two or more for Krippendorff)",
    options=frame.columns.tolist(),
    default=frame.columns.tolist()[:2],
)

st.subheader(f"Codebook for {question_id}")
try:
    codebook = workbook.load_codebook(question_id)
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Codes", len(codebook.codes))
        st.write(list(codebook.codes))
    with col2:
        st.metric("Flags", len(codebook.flags))
        st.write(list(codebook.flags))
except ReliabilityError as e:
    st.info(f"{e}. Statistics can still be computed with an inferred codebook.")

state = st.session_state.app_state
if (state['sheet_name'], state['rater_columns']) != (sheet_name, rater_columns):
    # Results belong to the previous selection
    state['conflicts'] = None
    state['summaries'] = []
    state['coincidence_matrix'] = None

st.session_state.app_state['sheet_name'] = sheet_name
st.session_state.app_state['question_id'] = question_id
st.session_state.app_state['rater_columns'] = rater_columns
st.session_state.app_state['current_step'] = 2
