"""Kupper-Hafner concordance for two raters assigning sets of codes.

Kupper & Hafner (1989), "On assessing interrater agreement for multiple
attribute responses". For unit i, let a_i and b_i be the number of codes
chosen by raters A and B, and x_i the number they share. The observed
concordance of the unit is x_i / max(a_i, b_i); chance concordance is
estimated from min(a_i, b_i) and the size of the codebook.

Two modes are supported:

* reference: flags listed in the question's codebook are excluded from the
  counts, and tokens missing from the codebook are an error;
* inferred: the codebook is every distinct code in the range, with no flags.
"""

import logging
from typing import Any, List, Optional

from .aggregation import chance_corrected, observed_agreement
from .cells import Cell, Grid, map_rows, parse_codes
from .errors import ClassificationError, StructuralError
from .models import AgreementSummary, Codebook

logger = logging.getLogger(__name__)

KUPPER_HAFNER_LABEL = "Kupper-Hafner concordance"


def _resolve_codebook(cells: Any, codebook: Optional[Codebook]) -> Codebook:
    return codebook if codebook is not None else Codebook.infer(cells)


def _count_codes(code_list: List[str], codebook: Codebook) -> int:
    count = 0
    for code in code_list:
        if codebook.is_code(code):
            count += 1
        elif not codebook.is_flag(code):
            raise ClassificationError(f"not recognized as either code or flag: {code}")
    return count


def concordance(cell_a: Cell, cell_b: Cell, codebook: Codebook) -> Optional[float]:
    """Observed proportion of concordance for one unit.

    Returns:
        x_i / max(a_i, b_i), or None when neither rater used a code

    Raises:
        ClassificationError: if a token is neither a code nor a flag
    """
    code_list_a = parse_codes(cell_a)
    code_list_b = parse_codes(cell_b)

    if not code_list_a and not code_list_b:
        return None

    a_i = _count_codes(code_list_a, codebook)
    b_i = _count_codes(code_list_b, codebook)
    if a_i == 0 and b_i == 0:
        return None

    x_i = sum(1 for code in code_list_a if codebook.is_code(code) and code in code_list_b)
    return x_i / max(a_i, b_i)


def min_count(cell_a: Cell, cell_b: Cell, codebook: Codebook) -> Optional[int]:
    """Smaller of the two raters' code counts, not counting flags.

    Returns None when both cells are empty.
    """
    code_list_a = parse_codes(cell_a)
    code_list_b = parse_codes(cell_b)

    if not code_list_a and not code_list_b:
        return None

    a_i = len(code_list_a) - sum(1 for code in code_list_a if codebook.is_flag(code))
    b_i = len(code_list_b) - sum(1 for code in code_list_b if codebook.is_flag(code))
    return min(a_i, b_i)


def concordance_column(cells: Any, codebook: Optional[Codebook] = None) -> Grid:
    """Per-row concordance; the codebook is inferred from the range when omitted."""
    codebook = _resolve_codebook(cells, codebook)
    return map_rows(cells, lambda row: concordance(row[0], row[1], codebook))


def min_count_column(cells: Any, codebook: Optional[Codebook] = None) -> Grid:
    codebook = _resolve_codebook(cells, codebook)
    return map_rows(cells, lambda row: min_count(row[0], row[1], codebook))


def kupper_hafner(cells: Any, codebook: Optional[Codebook] = None) -> AgreementSummary:
    """Kupper-Hafner concordance for a two-column range.

    Args:
        cells: Range with two columns of code lists
        codebook: Question codebook (reference mode), or None to infer it

    Returns:
        AgreementSummary with pi-hat as observed agreement and pi0 as chance
        agreement

    Raises:
        StructuralError: on a malformed range, or nothing to compare
        ClassificationError: if a token is neither a code nor a flag
    """
    codebook = _resolve_codebook(cells, codebook)

    concordances = [row[0] for row in concordance_column(cells, codebook)]
    min_counts = [row[0] for row in min_count_column(cells, codebook)]

    pi_hat = observed_agreement(concordances)

    valid_min_counts = [m for m in min_counts if m is not None]
    codebook_size = len(codebook.codes)
    if not valid_min_counts or codebook_size == 0:
        raise StructuralError("no codes to compare")
    pi_0 = sum(valid_min_counts) / (len(valid_min_counts) * codebook_size)

    units = sum(1 for c in concordances if c is not None)
    logger.debug(
        "Kupper-Hafner over %d units (codebook of %d): pi_hat=%.4f pi0=%.4f",
        units, codebook_size, pi_hat, pi_0,
    )
    return AgreementSummary(
        observed_agreement=pi_hat,
        chance_agreement=pi_0,
        coefficient=chance_corrected(pi_hat, pi_0),
        statistic=KUPPER_HAFNER_LABEL,
        units=units,
        details={"codebook_size": codebook_size},
    )


def kupper_hafner_reference(cells: Any, codebook: Codebook) -> AgreementSummary:
    """Concordance using the question's codebook; flags are excluded."""
    return kupper_hafner(cells, codebook)


def kupper_hafner_inferred(cells: Any) -> AgreementSummary:
    """Concordance using every code found in the range as the codebook."""
    return kupper_hafner(cells, None)
