import numpy as np

from irr_core.conflicts import find_conflicts
from irr_core.models import AgreementSummary
from irr_core.report import conflict_counts, interpret_coefficient, results_summary


def _summary(coefficient, statistic="Cohen's kappa"):
    return AgreementSummary(
        observed_agreement=0.9,
        chance_agreement=0.5,
        coefficient=coefficient,
        statistic=statistic,
        units=10,
    )


class TestInterpretCoefficient:
    def test_thresholds(self):
        assert interpret_coefficient(0.85) == ("Acceptable", "green")
        assert interpret_coefficient(0.80) == ("Acceptable", "green")
        assert interpret_coefficient(0.70) == ("Tentative", "orange")
        assert interpret_coefficient(0.2) == ("Insufficient", "red")

    def test_missing(self):
        assert interpret_coefficient(None)[0] == "Cannot compute"
        assert interpret_coefficient(np.nan)[0] == "Cannot compute"


class TestResultsSummary:
    def test_statistics_only(self):
        text = results_summary([_summary(0.9), _summary(0.3, "Krippendorff's alpha")])
        assert text.startswith("RELIABILITY:")
        assert "Cohen's kappa: 0.900 (Acceptable)" in text
        assert "STATISTICS NEEDING ATTENTION" in text
        assert "Krippendorff's alpha: 0.300" in text.split("STATISTICS NEEDING ATTENTION")[1]
        assert "CONFLICTS" not in text

    def test_with_conflicts(self, codebook):
        conflicts = find_conflicts([["1", "1"], ["1", "2"]], codebook)
        assert conflict_counts(conflicts) == (1, 1)

        text = results_summary([_summary(0.9)], conflicts)
        assert "CONFLICTS: 1 of 2 rows need reconciling" in text
        assert "row 2:" in text
        assert "STATISTICS NEEDING ATTENTION" not in text
