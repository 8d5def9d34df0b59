import pytest

from irr_core.conflicts import (
    cell_diff,
    codes_agree,
    conflict_resolved,
    diff,
    find_conflicts,
    format_diff,
)
from irr_core.errors import ClassificationError, StructuralError
from irr_core.models import Diff, conflicts_to_dataframe


class TestDiff:
    def test_flag_used_by_one_rater_is_agreement(self, codebook):
        d = cell_diff("1,9", "1", codebook)
        assert d.both == ("1", "9")
        assert d.only_a == ()
        assert d.only_b == ()
        assert d.status == "agree"

    def test_different_codes_conflict(self, codebook):
        d = cell_diff("1", "2", codebook)
        assert d == Diff(both=(), only_a=("1",), only_b=("2",))
        assert d.status == "conflict"

    def test_unknown_token(self, codebook):
        with pytest.raises(ClassificationError, match="7"):
            cell_diff("1", "7", codebook)

    def test_partition_covers_every_code(self):
        list_a, list_b = ["a", "b", "f"], ["b", "c", "g"]
        d = diff(list_a, list_b, flags=["f", "g"])
        assert set(d.both) | set(d.only_a) | set(d.only_b) == set(list_a) | set(list_b)
        assert not set(d.both) & set(d.only_a)
        assert not set(d.both) & set(d.only_b)
        assert d.only_a == ("a",)
        assert d.only_b == ("c",)

    def test_without_codebook_anything_goes(self):
        d = diff(["x"], ["x", "y"], flags=[])
        assert d.both == ("x",)
        assert d.only_b == ("y",)


class TestFormatDiff:
    def test_agreement(self):
        assert format_diff(Diff(("1", "9"), (), ())) == "1,9"

    def test_markers(self):
        assert format_diff(Diff(("2",), ("1",), ())) == "2\n<1"
        assert format_diff(Diff((), ("1",), ("3", "4"))) == "\n<1\n>3,4"

    def test_empty(self):
        assert format_diff(Diff((), (), ())) == ""


class TestFindConflicts:
    def test_rows(self, codebook):
        rows = find_conflicts([["1", "1"], ["1,9", "1"], ["2", "1"], ["", ""]], codebook)
        assert [r.row for r in rows] == [1, 2, 3, 4]
        assert [r.status for r in rows] == ["agree", "agree", "conflict", "agree"]
        assert rows[1].merged == "1,9"
        assert rows[2].merged == "\n<2\n>1"
        assert rows[2].highlight
        assert rows[3].merged == ""

    def test_error_names_row(self, codebook):
        with pytest.raises(ClassificationError, match="row 2"):
            find_conflicts([["1", "1"], ["1", "bogus"]], codebook)

    def test_wrong_width(self, codebook):
        with pytest.raises(StructuralError, match="row 1"):
            find_conflicts([["1", "1", "2"]], codebook)

    def test_dataframe(self, codebook):
        df = conflicts_to_dataframe(find_conflicts([["1", "2"]], codebook))
        assert df.loc[0, "status"] == "conflict"
        assert df.loc[0, "only_a"] == "1"
        assert df.loc[0, "only_b"] == "2"


class TestStatus:
    def test_codes_agree(self, codebook):
        assert codes_agree("1, 2", "2,1", codebook) == "agree"
        assert codes_agree("1", "", codebook) == "conflict"

    def test_conflict_resolved(self):
        assert conflict_resolved("1,9")
        assert conflict_resolved("")
        assert not conflict_resolved("2\n<1")
        assert not conflict_resolved(">3")
