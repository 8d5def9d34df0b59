"""Cell values, code-list parsing and shape-preserving grid helpers."""

import datetime as dt
from contextlib import contextmanager
from enum import Enum
from numbers import Number
from typing import Any, Callable, Iterator, List, Sequence

import numpy as np
import pandas as pd

from .constants import CODES_SEPARATOR
from .errors import ClassificationError, StructuralError, ValidationError

Cell = Any  # str | int | float | datetime, as delivered by the host
Grid = List[List[Cell]]


class CellKind(str, Enum):
    """Tagged union of the values a host cell can hold."""

    EMPTY = "empty"
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


def cell_kind(cell: Cell) -> CellKind:
    """Classify a raw cell value."""
    if cell is None or cell is pd.NaT or cell is pd.NA:
        return CellKind.EMPTY
    if isinstance(cell, (dt.date, dt.datetime, np.datetime64)):
        return CellKind.DATE
    if isinstance(cell, str):
        return CellKind.TEXT if cell.strip() else CellKind.EMPTY
    if isinstance(cell, Number):
        if isinstance(cell, (float, np.floating)) and np.isnan(cell):
            return CellKind.EMPTY
        return CellKind.NUMBER
    return CellKind.TEXT


def cell_text(cell: Cell) -> str:
    """Return the text projection of a cell.

    Numbers render the way a spreadsheet displays them (``1.0`` becomes
    ``"1"``). Dates are rejected rather than coerced.

    Raises:
        ValidationError: if the cell holds a date
    """
    kind = cell_kind(cell)
    if kind is CellKind.EMPTY:
        return ""
    if kind is CellKind.DATE:
        raise ValidationError(f"cell holds a date, expected codes: {cell}")
    if kind is CellKind.NUMBER:
        if isinstance(cell, (float, np.floating)) and float(cell).is_integer():
            return str(int(cell))
        return str(cell)
    return str(cell)


def parse_codes(cell: Cell) -> List[str]:
    """Turn a cell into its deduplicated list of codes.

    Splits on the separator, trims each token and drops empty ones, keeping
    the first occurrence of each code.
    """
    codes: List[str] = []
    for token in cell_text(cell).split(CODES_SEPARATOR):
        token = token.strip()
        if token and token not in codes:
            codes.append(token)
    return codes


def require_single_code(cell: Cell) -> str:
    """Return the only code in a cell, or ``""`` for an empty cell.

    Raises:
        ValidationError: if the cell has more than one code
    """
    codes = parse_codes(cell)
    if len(codes) > 1:
        raise ValidationError(f"cell has more than one code: {cell_text(cell)}")
    return codes[0] if codes else ""


def as_grid(data: Any) -> Grid:
    """Normalize a host range (list of rows or DataFrame) into a grid.

    Missing values (None/NaN) become empty strings.
    """
    if isinstance(data, pd.DataFrame):
        data = data.astype(object).to_numpy()
    if isinstance(data, np.ndarray):
        data = data.tolist()
    if not isinstance(data, (list, tuple)):
        raise StructuralError(f"input must be a range of cells, got {data!r}")

    grid: Grid = []
    for row in data:
        if not isinstance(row, (list, tuple)):
            raise StructuralError(f"input must be a range of cells, got {data!r}")
        grid.append(["" if cell_kind(c) is CellKind.EMPTY else c for c in row])
    return grid


def check_row_width(row: Sequence[Cell], index: int, width: int = 2, at_least: bool = False) -> None:
    """Raise StructuralError if a row doesn't have the expected number of cells.

    ``index`` is zero-based; the message reports it 1-based.
    """
    if at_least:
        if len(row) < width:
            raise StructuralError(
                f"expecting at least {width} cells in each input row, "
                f"but found {len(row)} in row {index + 1}"
            )
    elif len(row) != width:
        raise StructuralError(
            f"expecting {width} cells in each input row, but found {len(row)} in row {index + 1}"
        )


def map_grid(data: Any, fn: Callable[[Cell], Any]) -> Grid:
    """Apply ``fn`` to every cell, returning a grid of the same shape."""
    return [[fn(cell) for cell in row] for row in as_grid(data)]


@contextmanager
def row_context(index: int) -> Iterator[None]:
    """Prefix cell-level errors with the 1-based row they came from."""
    try:
        yield
    except (ValidationError, ClassificationError) as exc:
        raise type(exc)(f"row {index + 1}: {exc}") from exc


def iter_rows(data: Any, width: int = 2, at_least: bool = False) -> Iterator[List[Cell]]:
    """Yield the rows of a range after checking their width."""
    for i, row in enumerate(as_grid(data)):
        check_row_width(row, i, width, at_least)
        yield row


def map_rows(data: Any, fn: Callable[[List[Cell]], Any], width: int = 2) -> Grid:
    """Apply ``fn`` to every row of exactly ``width`` cells.

    Returns a one-column grid with a row per input row.

    Raises:
        StructuralError: naming the first row with the wrong width
    """
    output: Grid = []
    for i, row in enumerate(iter_rows(data, width)):
        with row_context(i):
            output.append([fn(row)])
    return output


def is_blank_row(row: Sequence[Cell]) -> bool:
    return all(not parse_codes(cell) for cell in row)


def is_range(value: Any) -> bool:
    """True for a range of cells, False for a single cell value."""
    return isinstance(value, (list, tuple, np.ndarray, pd.DataFrame))
