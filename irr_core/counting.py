"""Counting codes across cells and ranges."""

from typing import Any, Dict, List

from .cells import Cell, as_grid, is_range, parse_codes


def count_code_in_cell(code: Cell, cell: Cell) -> int:
    """Number of times ``code`` appears in a single cell (0 or 1)."""
    target = parse_codes(code)
    if not target:
        return 0
    return sum(1 for c in parse_codes(cell) if c == target[0])


def count_code_in_range(code: Cell, cells: Any) -> int:
    return sum(count_code_in_cell(code, cell) for row in as_grid(cells) for cell in row)


def count_code(code: Any, cells: Any) -> Any:
    """Count how often code(s) appear in a cell or range.

    If ``code`` is itself a range, the result is a range of counts with the
    same shape.
    """
    def count_one(c: Cell) -> int:
        if is_range(cells):
            return count_code_in_range(c, cells)
        return count_code_in_cell(c, cells)

    if is_range(code):
        return [[count_one(c) for c in row] for row in as_grid(code)]
    return count_one(code)


def unique_codes(cells: Any) -> List[str]:
    """All distinct codes in a range, in order of first appearance."""
    seen: Dict[str, None] = {}
    for row in as_grid(cells):
        for cell in row:
            for code in parse_codes(cell):
                seen.setdefault(code, None)
    return list(seen)


def count_unique_codes(cells: Any) -> int:
    return len(unique_codes(cells))


def count_codebook(final_codes: List[str], cells: Any) -> List[List[Any]]:
    """Pair every final code with the number of times it appears in ``cells``."""
    return [[code, count_code(code, cells)] for code in final_codes]
