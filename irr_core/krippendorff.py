"""Krippendorff's Alpha (nominal) computed from a coincidence matrix.

Follows Krippendorff, "Computing Krippendorff's Alpha-Reliability" (2011).
Each row of the range is a unit and each column a coder; empty cells are
missing data. Units with fewer than two values are not pairable.
"""

import logging
from typing import Any, Dict, List, Sequence

import numpy as np

from .aggregation import chance_corrected
from .cells import Grid, iter_rows, require_single_code, row_context
from .errors import StructuralError
from .models import AgreementSummary, CoincidenceMatrix

logger = logging.getLogger(__name__)

KRIPPENDORFF_LABEL = "Krippendorff's alpha"


def _unit_values(cells: Any) -> List[List[str]]:
    """Single code per non-empty cell, row by row."""
    units = []
    for i, row in enumerate(iter_rows(cells, 2, at_least=True)):
        with row_context(i):
            units.append([code for code in (require_single_code(c) for c in row) if code])
    return units


def product_sum(values: Sequence[float]) -> float:
    """Sum of the products of every value with each subsequent value."""
    arr = np.asarray(values, dtype=float).ravel()
    return float((arr.sum() ** 2 - (arr ** 2).sum()) / 2)


def coincidence_matrix(cells: Any) -> CoincidenceMatrix:
    """Build the coincidence matrix for a range of single-code cells.

    Within a unit of m values, every ordered pair of distinct coders adds
    1 / (m - 1) to the cell of their two values.

    Args:
        cells: Range with two or more coder columns

    Returns:
        CoincidenceMatrix over every value found in the range

    Raises:
        StructuralError: if a row has fewer than two columns
        ValidationError: if a cell holds more than one code
    """
    units = _unit_values(cells)
    values: List[str] = list(dict.fromkeys(code for unit in units for code in unit))
    index: Dict[str, int] = {v: i for i, v in enumerate(values)}

    counts = np.zeros((len(values), len(values)), dtype=float)
    for unit in units:
        m = len(unit)
        if m < 2:
            continue
        n_u = np.zeros(len(values), dtype=float)
        for code in unit:
            n_u[index[code]] += 1
        counts += (np.outer(n_u, n_u) - np.diag(n_u)) / (m - 1)

    return CoincidenceMatrix(values=values, counts=counts)


def disagreement_column(cells: Any) -> Grid:
    """Per-unit disagreement: product sum of value counts over (m - 1)."""
    units = _unit_values(cells)
    values = list(dict.fromkeys(code for unit in units for code in unit))
    output: Grid = []
    for unit in units:
        n_u = np.array([unit.count(v) for v in values], dtype=float)
        output.append([product_sum(n_u) / max(1, len(unit) - 1)])
    return output


def krippendorff_alpha(cells: Any) -> AgreementSummary:
    """Nominal Krippendorff's Alpha for two or more coders.

    Args:
        cells: Range with one column per coder and one row per unit

    Returns:
        AgreementSummary where observed/chance agreement are one minus the
        observed/expected disagreement

    Raises:
        StructuralError: if no unit has at least two values
    """
    matrix = coincidence_matrix(cells)
    n = matrix.total
    if n == 0:
        raise StructuralError("no units with at least two values to compare")

    off_diagonal = ~np.eye(len(matrix.values), dtype=bool)
    marginals = matrix.marginals

    observed_disagreement = float(matrix.counts[off_diagonal].sum()) / n
    expected_disagreement = float(np.outer(marginals, marginals)[off_diagonal].sum()) / (n * (n - 1))

    observed = 1.0 - observed_disagreement
    chance = 1.0 - expected_disagreement
    units = sum(1 for unit in _unit_values(cells) if len(unit) >= 2)

    summary = AgreementSummary(
        observed_agreement=observed,
        chance_agreement=chance,
        coefficient=chance_corrected(observed, chance),
        statistic=KRIPPENDORFF_LABEL,
        units=units,
        details={
            "observed_disagreement": observed_disagreement,
            "expected_disagreement": expected_disagreement,
            "pairable_values": n,
        },
    )
    logger.debug(
        "Krippendorff's alpha over %d units (%d pairable values): alpha=%.4f",
        units, int(n), summary.coefficient,
    )
    return summary
