"""Folding per-row values into corpus-level agreement numbers."""

from typing import Optional, Sequence

import numpy as np

from .errors import StructuralError
from .models import AgreementSummary


def observed_agreement(
    values: Sequence[Optional[float]],
    weights: Optional[Sequence[Optional[float]]] = None,
) -> float:
    """Weighted mean of per-row values.

    Rows whose value (or weight) is None are not applicable and are left out
    of both the numerator and the denominator.

    Args:
        values: Per-row agreement contributions
        weights: Per-row weights; every row weighs 1 when omitted

    Returns:
        sum(values) / sum(weights) over the applicable rows

    Raises:
        StructuralError: if lengths differ or no row carries any weight
    """
    if weights is None:
        weights = [1.0] * len(values)
    if len(weights) != len(values):
        raise StructuralError(
            f"expecting one weight per row, got {len(weights)} weights for {len(values)} rows"
        )

    pairs = [(v, w) for v, w in zip(values, weights) if v is not None and w is not None]
    total_weight = float(np.sum([w for _, w in pairs])) if pairs else 0.0
    if total_weight == 0:
        raise StructuralError("no rows with codes to compare")

    return float(np.sum([v for v, _ in pairs])) / total_weight


def chance_corrected(observed: float, chance: float) -> float:
    """(observed - chance) / (1 - chance), defined even when chance is 1."""
    if chance >= 1.0:
        return 1.0 if observed >= 1.0 else 0.0
    return (observed - chance) / (1.0 - chance)


def summarize(
    values: Sequence[Optional[float]],
    weights: Optional[Sequence[Optional[float]]] = None,
    chance: float = 0.0,
    statistic: str = "",
) -> AgreementSummary:
    """Roll per-row values into an AgreementSummary."""
    observed = observed_agreement(values, weights)
    units = sum(1 for v in values if v is not None)
    return AgreementSummary(
        observed_agreement=observed,
        chance_agreement=chance,
        coefficient=chance_corrected(observed, chance),
        statistic=statistic,
        units=units,
    )
