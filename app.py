"""
Qualitative Coding Assistant
A Streamlit app for resolving coding conflicts and computing intercoder reliability.
"""

import logging

import streamlit as st

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(
    page_title="Coding Assistant",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'app_state' not in st.session_state:
    st.session_state.app_state = {
        # Data
        'workbook': None,
        'sheet_name': None,
        'question_id': None,
        'rater_columns': [],

        # Results
        'conflicts': None,
        'summaries': [],
        'coincidence_matrix': None,

        # Navigation
        'current_step': 1,
    }


def render_progress_indicator():
    """Render the step progress indicator in sidebar."""
    st.sidebar.markdown("## Progress")

    steps = [
        ("1. Workbook", 1),
        ("2. Conflicts", 2),
        ("3. Reliability", 3),
    ]

    current = st.session_state.app_state['current_step']

    for name, step_num in steps:
        if step_num < current:
            st.sidebar.markdown(f"✅ {name}")
        elif step_num == current:
            st.sidebar.markdown(f"**➡️ {name}**")
        else:
            st.sidebar.markdown(f"⬜ {name}")


# Main page content
st.title("📊 Qualitative Coding Assistant")
st.markdown("""
This tool helps you:
- **Find conflicts** between two coders and build a merged, reconciled column
- **Calculate** Cohen's Kappa, Kupper-Hafner concordance and Krippendorff's Alpha
- **Check** every code against the question's codebook (codes and flags)

### Workbook conventions

- `<question>_codebook` sheets list the vocabulary, with a **Code** column, an
  optional **Type** column (`code` or `flag`) and an optional **Code - final** column
- `<question>_codes` or `<question>_codes_<variant>` sheets hold the coded responses,
  one column per coder, codes separated by commas

---
*Navigate using the pages in the sidebar →*
""")

render_progress_indicator()
