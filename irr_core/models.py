"""Data models for the coding assistant."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .constants import STATUS_AGREE, STATUS_CONFLICT
from .counting import unique_codes


@dataclass(frozen=True)
class Codebook:
    """Vocabulary of one coding question.

    Attributes:
        codes: Substantive codes, in codebook order
        flags: Codes that never cause a disagreement
        question_id: Question the codebook belongs to (None when inferred)
    """
    codes: Tuple[str, ...]
    flags: Tuple[str, ...] = ()
    question_id: Optional[str] = None

    @property
    def all_codes(self) -> List[str]:
        """Codes followed by flags, the order used for numeric shortcuts."""
        return list(self.codes) + list(self.flags)

    def is_code(self, token: str) -> bool:
        return token in self.codes

    def is_flag(self, token: str) -> bool:
        return token in self.flags

    def knows(self, token: str) -> bool:
        return token in self.codes or token in self.flags

    @classmethod
    def infer(cls, grid: Any) -> "Codebook":
        """Build a codebook from the data: every distinct code, no flags."""
        return cls(codes=tuple(unique_codes(grid)))


@dataclass(frozen=True)
class Diff:
    """Commonalities and differences between two raters' code lists."""
    both: Tuple[str, ...]
    only_a: Tuple[str, ...]
    only_b: Tuple[str, ...]

    @property
    def agrees(self) -> bool:
        return not self.only_a and not self.only_b

    @property
    def status(self) -> str:
        return STATUS_AGREE if self.agrees else STATUS_CONFLICT


@dataclass
class ConflictRow:
    """Outcome of comparing one row of paired cells."""
    row: int  # 1-based
    diff: Diff
    merged: str

    @property
    def status(self) -> str:
        return self.diff.status

    @property
    def highlight(self) -> bool:
        return not self.diff.agrees

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "final": self.merged,
            "status": self.status,
            "both": ",".join(self.diff.both),
            "only_a": ",".join(self.diff.only_a),
            "only_b": ",".join(self.diff.only_b),
        }


@dataclass
class CoincidenceMatrix:
    """Weighted co-occurrence of values within units (Krippendorff).

    Attributes:
        values: Distinct values, in order of first appearance
        counts: Square (n_values, n_values) array of accumulated weights
    """
    values: List[str]
    counts: np.ndarray

    @property
    def marginals(self) -> np.ndarray:
        """Pairable count of each value (row sums)."""
        return self.counts.sum(axis=1)

    @property
    def total(self) -> float:
        return float(self.counts.sum())

    def get(self, value_a: str, value_b: str) -> float:
        return float(self.counts[self.values.index(value_a), self.values.index(value_b)])

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.counts, index=self.values, columns=self.values)


@dataclass
class AgreementSummary:
    """Corpus-level result of a reliability statistic."""
    observed_agreement: float
    chance_agreement: float
    coefficient: float
    statistic: str = ""
    units: int = 0
    details: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "statistic": self.statistic,
            "observed_agreement": self.observed_agreement,
            "chance_agreement": self.chance_agreement,
            "coefficient": self.coefficient,
            "units": self.units,
        }
        result.update(self.details)
        return result


def summaries_to_dataframe(summaries: List[AgreementSummary]) -> pd.DataFrame:
    """Convert list of AgreementSummary to DataFrame."""
    return pd.DataFrame([s.to_dict() for s in summaries])


def conflicts_to_dataframe(conflicts: List[ConflictRow]) -> pd.DataFrame:
    """Convert list of ConflictRow to DataFrame."""
    return pd.DataFrame(
        [c.to_dict() for c in conflicts],
        columns=["row", "final", "status", "both", "only_a", "only_b"],
    )
