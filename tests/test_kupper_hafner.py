import pytest

from irr_core.errors import ClassificationError, StructuralError
from irr_core.kupper_hafner import (
    KUPPER_HAFNER_LABEL,
    concordance,
    concordance_column,
    kupper_hafner_inferred,
    kupper_hafner_reference,
    min_count,
    min_count_column,
)
from irr_core.models import Codebook

CELLS = [["x,y", "x"], ["y", "y"], ["", ""]]


class TestConcordance:
    def test_partial_overlap(self):
        assert concordance("x,y", "x", Codebook(codes=("x", "y"))) == pytest.approx(0.5)

    def test_both_empty(self):
        assert concordance("", "", Codebook(codes=("x",))) is None
        assert min_count("", "", Codebook(codes=("x",))) is None

    def test_flags_do_not_count(self, codebook):
        assert concordance("1,9", "1", codebook) == pytest.approx(1.0)
        assert min_count("1,9", "1,2", codebook) == 1

    def test_only_flags(self, codebook):
        assert concordance("9", "", codebook) is None

    def test_unknown_token_either_rater(self, codebook):
        with pytest.raises(ClassificationError):
            concordance("7", "1", codebook)
        with pytest.raises(ClassificationError):
            concordance("1", "7", codebook)

    def test_columns_infer_codebook(self):
        assert concordance_column(CELLS) == [[0.5], [1.0], [None]]
        assert min_count_column(CELLS) == [[1], [1], [None]]


class TestKupperHafner:
    def test_inferred(self):
        result = kupper_hafner_inferred(CELLS)
        assert result.statistic == KUPPER_HAFNER_LABEL
        assert result.units == 2
        assert result.observed_agreement == pytest.approx(0.75)
        assert result.chance_agreement == pytest.approx(0.5)
        assert result.coefficient == pytest.approx(0.5)
        assert result.details["codebook_size"] == 2

    def test_reference_uses_full_codebook(self):
        result = kupper_hafner_reference(CELLS, Codebook(codes=("x", "y", "z")))
        assert result.chance_agreement == pytest.approx(1 / 3)
        assert result.coefficient == pytest.approx(0.625)

    def test_reference_rejects_unknown_codes(self):
        with pytest.raises(ClassificationError, match="row 1"):
            kupper_hafner_reference(CELLS, Codebook(codes=("x",)))

    def test_nothing_to_compare(self):
        with pytest.raises(StructuralError):
            kupper_hafner_inferred([["", ""]])

    def test_wrong_width(self):
        with pytest.raises(StructuralError):
            kupper_hafner_inferred([["x", "x", "x"]])
