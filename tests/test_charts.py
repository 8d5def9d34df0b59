import numpy as np
import plotly.graph_objects as go

from irr_core.conflicts import find_conflicts
from irr_core.krippendorff import coincidence_matrix
from irr_core.models import AgreementSummary
from irr_charts.charts import (
    color_by_coefficient,
    plot_coincidence_matrix,
    plot_conflict_status,
    plot_statistics,
    truncate_label,
)


def test_truncate_label():
    assert truncate_label("short") == "short"
    assert truncate_label("a" * 30, max_length=10) == "aaaaaaa..."


def test_plot_statistics():
    summaries = [
        AgreementSummary(0.9, 0.5, 0.8, "Cohen's kappa", 10),
        AgreementSummary(0.7, 0.4, 0.5, "Krippendorff's alpha", 10),
    ]
    fig = plot_statistics(summaries)
    assert isinstance(fig, go.Figure)
    assert list(fig.data[0].y) == ["Cohen's kappa", "Krippendorff's alpha"]


def test_plot_coincidence_matrix():
    matrix = coincidence_matrix([["a", "a", "b"], ["b", "b", "c"]])
    fig = plot_coincidence_matrix(matrix)
    assert isinstance(fig, go.Figure)
    assert fig.data[0].type == "heatmap"
    np.testing.assert_allclose(fig.data[0].z, matrix.counts)
    assert list(fig.data[0].x) == ["a", "b", "c"]


def test_plot_conflict_status(codebook):
    fig = plot_conflict_status(find_conflicts([["1", "1"], ["1", "2"], ["2", "2"]], codebook))
    assert list(fig.data[0].y) == [2, 1]


def test_color_by_coefficient():
    assert color_by_coefficient(np.nan) == "background-color: #f0f0f0"
    assert color_by_coefficient(0.9) == "background-color: #90EE90"
    assert color_by_coefficient(0.7) == "background-color: #FFE4B5"
    assert color_by_coefficient(0.1) == "background-color: #FFB6C1"
