"""Finding and reconciling conflicts between two raters."""

import logging
from typing import Any, List, Optional, Sequence

from .cells import Cell, iter_rows, parse_codes, row_context
from .constants import CODES_SEPARATOR, ONLY_A_MARKER, ONLY_B_MARKER
from .errors import ClassificationError
from .models import Codebook, ConflictRow, Diff

logger = logging.getLogger(__name__)


def _check_known(tokens: Sequence[str], flags: Sequence[str], codes: Sequence[str]) -> None:
    for token in tokens:
        if token not in codes and token not in flags:
            raise ClassificationError(f"not recognized as either code or flag: {token}")


def diff(
    list_a: Sequence[str],
    list_b: Sequence[str],
    flags: Sequence[str],
    codes: Optional[Sequence[str]] = None,
) -> Diff:
    """Split two code lists into agreement and per-rater differences.

    A flag assigned by only one rater still counts as agreement.

    Args:
        list_a: Codes assigned by rater A
        list_b: Codes assigned by rater B
        flags: Codes whose differences are ignored
        codes: Substantive codes; when given, any other token is rejected

    Returns:
        Diff instance

    Raises:
        ClassificationError: if ``codes`` is given and a token is neither a
            code nor a flag
    """
    if codes is not None:
        _check_known(list_a, flags, codes)
        _check_known(list_b, flags, codes)

    both: List[str] = []
    only_a: List[str] = []
    only_b: List[str] = []

    for code in list_a:
        if code in list_b or code in flags:
            both.append(code)
        else:
            only_a.append(code)

    for code in list_b:
        if code in list_a:
            continue  # already covered by the first pass
        if code in flags:
            both.append(code)
        else:
            only_b.append(code)

    return Diff(both=tuple(both), only_a=tuple(only_a), only_b=tuple(only_b))


def cell_diff(cell_a: Cell, cell_b: Cell, codebook: Codebook) -> Diff:
    return diff(parse_codes(cell_a), parse_codes(cell_b), codebook.flags, codebook.codes)


def format_diff(d: Diff) -> str:
    """Merged text: agreed codes, then ``<`` rater A only, ``>`` rater B only."""
    text = ""
    if d.both:
        text += CODES_SEPARATOR.join(d.both)
    if d.only_a:
        text += "\n" + ONLY_A_MARKER + CODES_SEPARATOR.join(d.only_a)
    if d.only_b:
        text += "\n" + ONLY_B_MARKER + CODES_SEPARATOR.join(d.only_b)
    return text


def codes_agree(cell_a: Cell, cell_b: Cell, codebook: Codebook) -> str:
    """Return ``"agree"`` or ``"conflict"`` for a pair of cells."""
    return cell_diff(cell_a, cell_b, codebook).status


def find_conflicts(cells: Any, codebook: Codebook) -> List[ConflictRow]:
    """Compare two columns of codes row by row.

    Args:
        cells: Range with exactly two columns (rater A, rater B)
        codebook: Codebook for the question

    Returns:
        One ConflictRow per input row, with the merged text and status
    """
    results = []
    for i, (cell_a, cell_b) in enumerate(iter_rows(cells, 2)):
        with row_context(i):
            d = cell_diff(cell_a, cell_b, codebook)
        results.append(ConflictRow(row=i + 1, diff=d, merged=format_diff(d)))

    n_conflicts = sum(1 for r in results if r.highlight)
    logger.debug("Compared %d rows, %d conflicts", len(results), n_conflicts)
    return results


def conflict_resolved(merged: Cell) -> bool:
    """True once a reconciled cell no longer carries ``<``/``>`` markers."""
    text = "" if merged is None else str(merged)
    return ONLY_A_MARKER not in text and ONLY_B_MARKER not in text
