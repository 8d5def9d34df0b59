"""Workbook adapter: coding and codebook sheets backed by pandas DataFrames."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

import pandas as pd

from .cells import Grid, as_grid
from .codebook import final_name_mapping, load_codebook, resolve_question_id
from .constants import (
    CODEBOOK_HEADER_CODE,
    CODEBOOK_HEADER_FINAL,
    CODEBOOK_HEADER_TYPE,
    codebook_sheet_name,
)
from .errors import ConfigurationError
from .models import Codebook

logger = logging.getLogger(__name__)

Column = Union[str, int]


class Workbook:
    """A set of named sheets, each a DataFrame whose header row is the columns.

    Codebooks are read from the sheets on every call, so edits made between
    two computations are always picked up.
    """

    def __init__(self, sheets: Dict[str, pd.DataFrame]):
        self.sheets = dict(sheets)

    @classmethod
    def from_excel(cls, file: Any) -> "Workbook":
        """Load every sheet of an XLSX file (path or uploaded file object)."""
        if hasattr(file, 'seek'):
            file.seek(0)
        sheets = pd.read_excel(file, sheet_name=None, dtype=object)
        logger.info("Loaded workbook with sheets: %s", ", ".join(sheets))
        return cls(sheets)

    @classmethod
    def from_csv_dir(cls, directory: Union[str, Path]) -> "Workbook":
        """Load every CSV file in a directory; the file stem is the sheet name."""
        directory = Path(directory)
        if not directory.is_dir():
            raise ConfigurationError(f"{directory} is not a directory")
        sheets = {
            path.stem: pd.read_csv(path, dtype=object, keep_default_na=False)
            for path in sorted(directory.glob("*.csv"))
        }
        logger.info("Loaded %d sheets from %s", len(sheets), directory)
        return cls(sheets)

    @property
    def sheet_names(self) -> List[str]:
        return list(self.sheets.keys())

    def sheet(self, name: str) -> pd.DataFrame:
        if name not in self.sheets:
            raise ConfigurationError(f"Couldn't find a sheet with the name {name}")
        return self.sheets[name]

    def question_for_sheet(self, name: str) -> str:
        return resolve_question_id(name)

    def _codebook_sheet(self, question_id: str) -> pd.DataFrame:
        frame = self.sheet(codebook_sheet_name(question_id))
        if CODEBOOK_HEADER_CODE not in frame.columns:
            raise ConfigurationError(
                f"codebook for {question_id} has no {CODEBOOK_HEADER_CODE!r} column"
            )
        return frame

    def _paired_column(self, question_id: str, header: str) -> List[Tuple[Any, Any]]:
        frame = self._codebook_sheet(question_id).fillna("")
        codes = frame[CODEBOOK_HEADER_CODE].tolist()
        if header in frame.columns:
            other = frame[header].tolist()
        else:
            other = [""] * len(codes)
        return list(zip(codes, other))

    def codebook_rows(self, question_id: str) -> List[Tuple[Any, Any]]:
        """(code, type) pairs from the question's codebook sheet."""
        return self._paired_column(question_id, CODEBOOK_HEADER_TYPE)

    def final_name_rows(self, question_id: str) -> List[Tuple[Any, Any]]:
        """(code, final name) pairs from the question's codebook sheet."""
        return self._paired_column(question_id, CODEBOOK_HEADER_FINAL)

    def load_codebook(self, question_id: str) -> Codebook:
        return load_codebook(self.codebook_rows(question_id), question_id=question_id)

    def load_final_names(self, question_id: str) -> Dict[str, str]:
        return final_name_mapping(self.final_name_rows(question_id))

    def coded_range(self, sheet_name: str, columns: Sequence[Column]) -> Grid:
        """Cells from the given columns (names or positions) of a sheet.

        Trailing rows where every selected cell is empty are dropped.
        """
        if not columns:
            raise ConfigurationError("select at least one column")
        frame = self.sheet(sheet_name)
        selected = []
        for column in columns:
            if isinstance(column, int):
                if not 0 <= column < len(frame.columns):
                    raise ConfigurationError(f"sheet {sheet_name} has no column {column + 1}")
                selected.append(frame.iloc[:, column])
            else:
                if column not in frame.columns:
                    raise ConfigurationError(f"sheet {sheet_name} has no column {column!r}")
                selected.append(frame[column])

        grid = as_grid(pd.concat(selected, axis=1))
        while grid and all(cell == "" for cell in grid[-1]):
            grid.pop()
        return grid
