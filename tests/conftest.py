import pandas as pd
import pytest

from irr_core.models import Codebook
from irr_core.workbook import Workbook


@pytest.fixture
def codebook():
    """Two codes and one flag."""
    return Codebook(codes=("1", "2"), flags=("9",), question_id="q1")


@pytest.fixture
def workbook():
    """Workbook with a coding sheet, its codebook and an unrelated sheet."""
    codes = pd.DataFrame({
        "coder_a": ["1", "1,9", "2", None, "1,2"],
        "coder_b": ["1", "1", "1", None, "2"],
        "notes": ["", "", "check", "", ""],
    }, dtype=object)
    codebook = pd.DataFrame({
        "Code": ["1", "2", "9", None],
        "Type": ["code", "", "flag", None],
        "Code - final": ["one", "two", "", None],
    }, dtype=object)
    summary = pd.DataFrame({"x": [1, 2]})
    return Workbook({
        "q1_codes": codes,
        "q1_codebook": codebook,
        "summary": summary,
    })
