"""Cohen's Kappa for two raters, exclusive and multi-code variants."""

import logging
from collections import Counter
from typing import Any, List, Optional, Tuple

from .aggregation import summarize
from .cells import Cell, Grid, is_blank_row, iter_rows, map_rows, parse_codes, require_single_code, row_context
from .errors import StructuralError, ValidationError
from .models import AgreementSummary

logger = logging.getLogger(__name__)

COHEN_LABEL = "Cohen's kappa"
APPROXIMATE_COHEN_LABEL = "(fake) Cohen's kappa"


# ---------------------------------------------------------------------------
# Exclusive coding: exactly one code per cell
# ---------------------------------------------------------------------------

def _single_code_pair(cell_a: Cell, cell_b: Cell) -> Tuple[str, str]:
    code_a = require_single_code(cell_a)
    code_b = require_single_code(cell_b)
    if not code_a or not code_b:
        raise ValidationError("expecting exactly one code from each rater, found an empty cell")
    return code_a, code_b


def codes_agree_exclusive(cell_a: Cell, cell_b: Cell) -> int:
    """Return 1 if both cells hold the same single code, 0 if they don't.

    Raises:
        ValidationError: if either cell has more (or less) than one code
    """
    code_a, code_b = _single_code_pair(cell_a, cell_b)
    return 1 if code_a == code_b else 0


def agreement_column(cells: Any) -> Grid:
    """Per-row agreement (1/0); rows where both cells are empty give None."""
    def agree(row: List[Cell]) -> Optional[int]:
        if is_blank_row(row):
            return None
        return codes_agree_exclusive(*row)

    return map_rows(cells, agree)


def cohen_chance_agreement(cells: Any) -> float:
    """Probability of chance agreement, using Cohen's method.

    Sum over codes of countA(c) * countB(c) / N**2, where N is the number of
    rows with codes.

    Raises:
        StructuralError: if there are no rows to compare
    """
    counts_a: Counter = Counter()
    counts_b: Counter = Counter()
    n_rows = 0

    for i, row in enumerate(iter_rows(cells, 2)):
        with row_context(i):
            if is_blank_row(row):
                continue
            code_a, code_b = _single_code_pair(*row)
        counts_a[code_a] += 1
        counts_b[code_b] += 1
        n_rows += 1

    if n_rows == 0:
        raise StructuralError("no cells in range")

    probability_sum = sum(counts_a[code] * counts_b[code] for code in counts_a)
    return probability_sum / (n_rows * n_rows)


def cohens_kappa(cells: Any) -> AgreementSummary:
    """Cohen's Kappa for two raters assigning exactly one code per unit.

    Args:
        cells: Range with two columns of codes

    Returns:
        AgreementSummary with observed agreement, chance agreement and kappa
    """
    agreement = [row[0] for row in agreement_column(cells)]
    chance = cohen_chance_agreement(cells)
    summary = summarize(agreement, chance=chance, statistic=COHEN_LABEL)
    logger.debug(
        "Cohen's kappa over %d units: observed=%.4f chance=%.4f kappa=%.4f",
        summary.units, summary.observed_agreement, chance, summary.coefficient,
    )
    return summary


# ---------------------------------------------------------------------------
# Multi-code cells
#
# This is a heuristic generalization of Cohen's Kappa to cells with several
# codes. It is not a published statistic and its results are approximate.
# ---------------------------------------------------------------------------

def common_code_count(cell_a: Cell, cell_b: Cell) -> int:
    """Number of codes the two cells have in common."""
    codes_b = parse_codes(cell_b)
    return sum(1 for code in parse_codes(cell_a) if code in codes_b)


def max_code_count(cell_a: Cell, cell_b: Cell) -> int:
    """Largest number of codes used by either rater."""
    return max(len(parse_codes(cell_a)), len(parse_codes(cell_b)))


def common_count_column(cells: Any) -> Grid:
    return map_rows(cells, lambda row: None if is_blank_row(row) else common_code_count(*row))


def max_count_column(cells: Any) -> Grid:
    return map_rows(cells, lambda row: None if is_blank_row(row) else max_code_count(*row))


def cohen_chance_agreement_multiple(cells: Any) -> float:
    """Chance agreement over multi-code cells.

    Every code in a cell counts towards its rater's marginal; the sum of
    countA(c) * countB(c) is divided by the squared number of rows. Blank
    rows count towards N.

    Raises:
        StructuralError: if the range has no rows
    """
    counts_a: Counter = Counter()
    counts_b: Counter = Counter()
    n_rows = 0

    for i, (cell_a, cell_b) in enumerate(iter_rows(cells, 2)):
        with row_context(i):
            counts_a.update(parse_codes(cell_a))
            counts_b.update(parse_codes(cell_b))
        n_rows += 1

    if n_rows == 0:
        raise StructuralError("no cells in range")

    probability_sum = sum(counts_a[code] * counts_b[code] for code in counts_a)
    return probability_sum / (n_rows * n_rows)


def approximate_cohens_kappa(cells: Any) -> AgreementSummary:
    """Approximate ("fake") Cohen's Kappa for cells holding several codes.

    Observed agreement is the number of shared codes over the larger code
    count of each row, summed across rows. Treat the result as indicative
    only.
    """
    common = [row[0] for row in common_count_column(cells)]
    maximum = [row[0] for row in max_count_column(cells)]
    chance = cohen_chance_agreement_multiple(cells)
    summary = summarize(common, maximum, chance=chance, statistic=APPROXIMATE_COHEN_LABEL)
    logger.debug(
        "Approximate Cohen's kappa over %d units: observed=%.4f chance=%.4f kappa=%.4f",
        summary.units, summary.observed_agreement, chance, summary.coefficient,
    )
    return summary
