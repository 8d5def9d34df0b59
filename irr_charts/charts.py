"""Plotly visualization functions for reliability results."""

from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from irr_core.constants import THRESHOLD_ACCEPTABLE, THRESHOLD_TENTATIVE
from irr_core.models import AgreementSummary, CoincidenceMatrix, ConflictRow


def truncate_label(label: str, max_length: int = 20) -> str:
    """Truncate a label if it exceeds max_length."""
    if len(label) > max_length:
        return label[:max_length - 3] + "..."
    return label


def plot_statistics(
    summaries: List[AgreementSummary],
    title: str = "Reliability by Statistic",
) -> go.Figure:
    """Create horizontal bar chart of the coefficient of each statistic.

    Args:
        summaries: List of AgreementSummary objects
        title: Chart title

    Returns:
        Plotly Figure
    """
    df = pd.DataFrame([{
        "statistic": s.statistic,
        "coefficient": s.coefficient,
        "observed": s.observed_agreement,
        "chance": s.chance_agreement,
    } for s in summaries])

    fig = px.bar(
        df,
        x="coefficient",
        y="statistic",
        orientation="h",
        title=title,
        labels={"coefficient": "Coefficient", "statistic": "Statistic"},
        hover_data={"observed": ":.3f", "chance": ":.3f"},
    )

    # Add threshold lines
    fig.add_vline(
        x=THRESHOLD_TENTATIVE,
        line_dash="dash",
        line_color="orange",
        annotation_text=f"Tentative ({THRESHOLD_TENTATIVE})",
        annotation_position="top",
    )
    fig.add_vline(
        x=THRESHOLD_ACCEPTABLE,
        line_dash="solid",
        line_color="green",
        annotation_text=f"Acceptable ({THRESHOLD_ACCEPTABLE})",
        annotation_position="top",
    )

    fig.update_layout(
        xaxis_range=[min(0.0, float(df["coefficient"].min()) if len(df) else 0.0), 1.05],
        height=max(300, len(df) * 60),
    )

    return fig


def plot_coincidence_matrix(
    matrix: CoincidenceMatrix,
    title: str = "Coincidence Matrix",
    max_label_length: int = 20,
) -> go.Figure:
    """Create annotated heatmap of a coincidence matrix.

    Args:
        matrix: CoincidenceMatrix from krippendorff.coincidence_matrix
        title: Chart title
        max_label_length: Maximum length for value labels before truncation

    Returns:
        Plotly Figure
    """
    labels = [truncate_label(str(v), max_label_length) for v in matrix.values]

    fig = px.imshow(
        matrix.counts,
        x=labels,
        y=labels,
        text_auto=".2f",
        color_continuous_scale="Blues",
        aspect="auto",
    )

    fig.update_layout(
        title=title,
        xaxis_title="Value",
        yaxis_title="Value",
        height=max(400, len(labels) * 30),
    )

    return fig


def plot_conflict_status(
    conflicts: List[ConflictRow],
    title: str = "Agreement and Conflicts",
) -> go.Figure:
    """Create bar chart counting agreeing and conflicting rows.

    Args:
        conflicts: Rows from find_conflicts
        title: Chart title

    Returns:
        Plotly Figure
    """
    n_conflicts = sum(1 for c in conflicts if c.highlight)
    counts = {"agree": len(conflicts) - n_conflicts, "conflict": n_conflicts}

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=list(counts.keys()),
        y=list(counts.values()),
        marker_color=["green", "gold"],
        text=list(counts.values()),
        textposition="outside",
    ))

    fig.update_layout(
        title=title,
        xaxis_title="Status",
        yaxis_title="Rows",
        height=350,
    )

    return fig


def color_by_coefficient(val: float) -> str:
    """Return CSS color string based on a reliability coefficient.

    Args:
        val: Coefficient value

    Returns:
        CSS color string
    """
    if pd.isna(val):
        return "background-color: #f0f0f0"
    elif val >= THRESHOLD_ACCEPTABLE:
        return "background-color: #90EE90"  # Light green
    elif val >= THRESHOLD_TENTATIVE:
        return "background-color: #FFE4B5"  # Light orange
    else:
        return "background-color: #FFB6C1"  # Light red
