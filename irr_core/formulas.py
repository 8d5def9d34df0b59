"""Spreadsheet custom functions.

Each formula takes a range (list of rows or DataFrame) and returns a scalar
or a range, the way a spreadsheet formula fills its output cells. The
functions themselves raise; ``call_formula`` is the host-side wrapper that
turns a failure into a single error value for the output cell.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import numpy as np

from . import cohen, conflicts, counting, kupper_hafner, krippendorff
from .cells import Cell, CellKind, Grid, as_grid, cell_kind, is_range, map_grid
from .codebook import final_code_list, rename_codes, resolve_question_id
from .errors import ConfigurationError, ReliabilityError, ValidationError
from .models import Codebook
from .workbook import Workbook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormulaError:
    """Error value shown in place of a formula's output."""
    message: str

    def __str__(self) -> str:
        return f"#ERROR! {self.message}"


def _require_workbook(workbook: Optional[Workbook]) -> Workbook:
    if workbook is None:
        raise ConfigurationError("this formula needs access to the workbook's codebook sheets")
    return workbook


def _codebook(cells: Any, question_id: Optional[str], workbook: Optional[Workbook]) -> Codebook:
    """Codebook for the question, or one inferred from the range."""
    if question_id:
        return _require_workbook(workbook).load_codebook(question_id)
    return Codebook.infer(cells)


def _cell_number(cell: Cell) -> float:
    if cell_kind(cell) is not CellKind.NUMBER:
        try:
            return float(str(cell).strip())
        except ValueError:
            raise ValidationError(f"expecting a number, got {cell!r}") from None
    return float(cell)


def codesagree2(cells: Any, workbook: Optional[Workbook] = None) -> Grid:
    return cohen.agreement_column(cells)


def cohen_probability(cells: Any, workbook: Optional[Workbook] = None) -> float:
    return cohen.cohen_chance_agreement(cells)


def cohens_kappa(cells: Any, workbook: Optional[Workbook] = None) -> float:
    return cohen.cohens_kappa(cells).coefficient


def codesagreecount(cells: Any, workbook: Optional[Workbook] = None) -> Grid:
    return cohen.common_count_column(cells)


def maxcount(cells: Any, workbook: Optional[Workbook] = None) -> Grid:
    return cohen.max_count_column(cells)


def cohen_probability_multiple(cells: Any, workbook: Optional[Workbook] = None) -> float:
    return cohen.cohen_chance_agreement_multiple(cells)


def concordance(cells: Any, question_id: Optional[str] = None, workbook: Optional[Workbook] = None) -> Grid:
    """Per-row concordance. Without a question ID the codebook is inferred."""
    return kupper_hafner.concordance_column(cells, _codebook(cells, question_id, workbook))


def mincount(cells: Any, question_id: Optional[str] = None, workbook: Optional[Workbook] = None) -> Grid:
    return kupper_hafner.min_count_column(cells, _codebook(cells, question_id, workbook))


def kupper_hafner_concordance(
    cells: Any, question_id: Optional[str] = None, workbook: Optional[Workbook] = None
) -> float:
    if question_id:
        codebook = _require_workbook(workbook).load_codebook(question_id)
        return kupper_hafner.kupper_hafner_reference(cells, codebook).coefficient
    return kupper_hafner.kupper_hafner_inferred(cells).coefficient


def coincidence_matrix(cells: Any, workbook: Optional[Workbook] = None) -> Grid:
    """Coincidence matrix with value labels in the first row and column."""
    matrix = krippendorff.coincidence_matrix(cells)
    output: Grid = [[""] + list(matrix.values)]
    for value, row in zip(matrix.values, matrix.counts.tolist()):
        output.append([value] + row)
    return output


def productsum(cells: Any, workbook: Optional[Workbook] = None) -> float:
    values = [_cell_number(c) for row in as_grid(cells) for c in row]
    return krippendorff.product_sum(np.array(values, dtype=float))


def krippendorff_alpha(cells: Any, workbook: Optional[Workbook] = None) -> float:
    return krippendorff.krippendorff_alpha(cells).coefficient


def countcode(code: Any, cells: Any, workbook: Optional[Workbook] = None) -> Any:
    return counting.count_code(code, cells)


def listuniquecodes(cells: Any, workbook: Optional[Workbook] = None) -> Grid:
    return [[code] for code in counting.unique_codes(cells)]


def countuniquecodes(cells: Any, workbook: Optional[Workbook] = None) -> int:
    return counting.count_unique_codes(cells)


def countcodebook(cells: Any, sheet_name: str, workbook: Optional[Workbook] = None) -> Grid:
    """Every final code of the sheet's question next to its count in ``cells``."""
    mapping = _require_workbook(workbook).load_final_names(resolve_question_id(sheet_name))
    return counting.count_codebook(final_code_list(mapping), cells)


def finalnames(cells: Any, sheet_name: str, workbook: Optional[Workbook] = None) -> Any:
    """Rename codes in a cell or range to their final names."""
    mapping = _require_workbook(workbook).load_final_names(resolve_question_id(sheet_name))
    if is_range(cells):
        return map_grid(cells, lambda cell: rename_codes(cell, mapping))
    return rename_codes(cells, mapping)


def codes_agree(cell_a: Cell, cell_b: Cell, question_id: str, workbook: Optional[Workbook] = None) -> str:
    codebook = _require_workbook(workbook).load_codebook(question_id)
    return conflicts.codes_agree(cell_a, cell_b, codebook)


FORMULAS: Dict[str, Callable[..., Any]] = {
    "CODESAGREE2": codesagree2,
    "COHEN_PROBABILITY": cohen_probability,
    "COHENS_KAPPA": cohens_kappa,
    "CODESAGREECOUNT": codesagreecount,
    "MAXCOUNT": maxcount,
    "COHEN_PROBABILITY_MULTIPLE": cohen_probability_multiple,
    "CONCORDANCE": concordance,
    "MINCOUNT": mincount,
    "KUPPER_HAFNER": kupper_hafner_concordance,
    "COINCIDENCE_MATRIX": coincidence_matrix,
    "PRODUCTSUM": productsum,
    "KRIPPENDORFF_ALPHA": krippendorff_alpha,
    "COUNTCODE": countcode,
    "LISTUNIQUECODES": listuniquecodes,
    "COUNTUNIQUECODES": countuniquecodes,
    "COUNTCODEBOOK": countcodebook,
    "FINALNAMES": finalnames,
    "CODES_AGREE": codes_agree,
}


def call_formula(name: str, *args: Any, workbook: Optional[Workbook] = None) -> Any:
    """Evaluate a formula the way the host does.

    Returns:
        The formula's value, or a FormulaError if the computation failed

    Raises:
        KeyError: if no formula has that name
    """
    formula = FORMULAS[name.upper()]
    try:
        return formula(*args, workbook=workbook)
    except ReliabilityError as exc:
        logger.warning("%s failed: %s", name.upper(), exc)
        return FormulaError(str(exc))
