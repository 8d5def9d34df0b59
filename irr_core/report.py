"""Interpretation and text summaries of reliability results."""

from typing import List, Optional, Tuple

import numpy as np

from .constants import THRESHOLD_ACCEPTABLE, THRESHOLD_TENTATIVE
from .models import AgreementSummary, ConflictRow


def interpret_coefficient(value: float) -> Tuple[str, str]:
    """Interpret a reliability coefficient according to standard thresholds.

    Args:
        value: Kappa, concordance or alpha value

    Returns:
        Tuple of (interpretation label, color for display)
    """
    if value is None or np.isnan(value):
        return "Cannot compute", "gray"
    elif value >= THRESHOLD_ACCEPTABLE:
        return "Acceptable", "green"
    elif value >= THRESHOLD_TENTATIVE:
        return "Tentative", "orange"
    else:
        return "Insufficient", "red"


def conflict_counts(conflicts: List[ConflictRow]) -> Tuple[int, int]:
    """Return (agreeing rows, conflicting rows)."""
    n_conflicts = sum(1 for c in conflicts if c.highlight)
    return len(conflicts) - n_conflicts, n_conflicts


def results_summary(
    summaries: List[AgreementSummary],
    conflicts: Optional[List[ConflictRow]] = None,
) -> str:
    """Generate a text summary of all results.

    Args:
        summaries: One AgreementSummary per statistic computed
        conflicts: Rows from find_conflicts, if the conflict view was run

    Returns:
        Summary text
    """
    lines = ["RELIABILITY:"]

    for s in summaries:
        interp, _ = interpret_coefficient(s.coefficient)
        lines.append(
            f"  - {s.statistic}: {s.coefficient:.3f} ({interp}); "
            f"observed {s.observed_agreement:.3f}, chance {s.chance_agreement:.3f}, "
            f"{s.units} units"
        )

    if conflicts is not None:
        _, n_conflict = conflict_counts(conflicts)
        lines.append("")
        lines.append(f"CONFLICTS: {n_conflict} of {len(conflicts)} rows need reconciling")
        for c in conflicts:
            if c.highlight:
                merged = c.merged.replace("\n", " ")
                lines.append(f"  - row {c.row}: {merged}")

    low = [s for s in summaries if s.coefficient < THRESHOLD_TENTATIVE]
    if low:
        lines.append("")
        lines.append(f"STATISTICS NEEDING ATTENTION (< {THRESHOLD_TENTATIVE}):")
        for s in low:
            lines.append(f"  - {s.statistic}: {s.coefficient:.3f}")

    return "\n".join(lines)
