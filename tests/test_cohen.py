import datetime as dt

import pytest
from sklearn.metrics import cohen_kappa_score

from irr_core.cohen import (
    APPROXIMATE_COHEN_LABEL,
    agreement_column,
    approximate_cohens_kappa,
    cohen_chance_agreement,
    cohen_chance_agreement_multiple,
    cohens_kappa,
    common_count_column,
    max_count_column,
)
from irr_core.errors import StructuralError, ValidationError

RATER_A = ["a", "a", "b", "b", "c", "a", "c", "b"]
RATER_B = ["a", "b", "b", "b", "c", "c", "c", "a"]


class TestCohensKappa:
    def test_matches_sklearn(self):
        cells = [[a, b] for a, b in zip(RATER_A, RATER_B)]
        result = cohens_kappa(cells)
        assert result.coefficient == pytest.approx(cohen_kappa_score(RATER_A, RATER_B))
        assert result.units == len(RATER_A)

    def test_agreement_column(self):
        assert agreement_column([["a", "a"], ["a", "b"], ["", ""]]) == [[1], [0], [None]]

    def test_blank_rows_are_excluded(self):
        result = cohens_kappa([["a", "a"], ["", ""], ["b", "b"]])
        assert result.units == 2
        assert result.coefficient == pytest.approx(1.0)
        assert cohen_chance_agreement([["a", "a"], ["", ""], ["b", "b"]]) == pytest.approx(0.5)

    def test_perfect_agreement_on_one_code(self):
        result = cohens_kappa([["a", "a"], ["a", "a"]])
        assert result.chance_agreement == 1.0
        assert result.coefficient == 1.0

    def test_total_disagreement_is_defined(self):
        result = cohens_kappa([["a", "b"], ["b", "a"]])
        assert result.chance_agreement == pytest.approx(0.5)
        assert result.coefficient == pytest.approx(-1.0)

    def test_more_than_one_code(self):
        with pytest.raises(ValidationError, match="row 2"):
            cohens_kappa([["a", "a"], ["a,b", "a"]])

    def test_half_empty_row(self):
        with pytest.raises(ValidationError):
            cohens_kappa([["a", ""]])

    def test_wrong_width(self):
        with pytest.raises(StructuralError, match="row 2"):
            cohens_kappa([["a", "a"], ["a"]])

    def test_date_cell_names_row(self):
        with pytest.raises(ValidationError, match="row 2"):
            cohen_chance_agreement([["a", "a"], [dt.date(2020, 1, 1), "a"]])

    def test_no_rows(self):
        with pytest.raises(StructuralError):
            cohen_chance_agreement([["", ""]])


class TestApproximateCohensKappa:
    CELLS = [["1,2", "1"], ["3", "3"], ["", ""]]

    def test_count_columns(self):
        assert common_count_column(self.CELLS) == [[1], [1], [None]]
        assert max_count_column(self.CELLS) == [[2], [1], [None]]

    def test_chance_counts_blank_rows(self):
        assert cohen_chance_agreement_multiple(self.CELLS) == pytest.approx(2 / 9)
        assert cohen_chance_agreement_multiple([["a", "a"], ["", ""], ["b", "b"]]) == pytest.approx(2 / 9)

    def test_blank_row_in_the_middle(self):
        result = approximate_cohens_kappa([["a", "b"], ["", ""], ["b", "b"], ["a", "a"]])
        assert result.units == 3
        assert result.chance_agreement == pytest.approx(0.25)
        assert result.coefficient == pytest.approx(5 / 9)

    def test_empty_range(self):
        with pytest.raises(StructuralError):
            cohen_chance_agreement_multiple([])

    def test_kappa(self):
        result = approximate_cohens_kappa(self.CELLS)
        assert result.statistic == APPROXIMATE_COHEN_LABEL
        assert result.observed_agreement == pytest.approx(2 / 3)
        assert result.coefficient == pytest.approx(4 / 7)

    def test_single_codes_match_exclusive_kappa(self):
        cells = [[a, b] for a, b in zip(RATER_A, RATER_B)]
        assert approximate_cohens_kappa(cells).coefficient == pytest.approx(
            cohens_kappa(cells).coefficient
        )
