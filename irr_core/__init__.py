"""Inter-rater reliability and conflict resolution for qualitative coding."""

from .errors import (
    ReliabilityError,
    StructuralError,
    ClassificationError,
    ConfigurationError,
    ValidationError,
)
from .models import AgreementSummary, CoincidenceMatrix, Codebook, ConflictRow, Diff
from .cells import CellKind, cell_kind, cell_text, parse_codes, require_single_code, map_grid, map_rows
from .codebook import load_codebook, resolve_question_id, coding_question, final_name_mapping
from .conflicts import diff, format_diff, codes_agree, find_conflicts, conflict_resolved
from .cohen import cohens_kappa, approximate_cohens_kappa
from .kupper_hafner import kupper_hafner_reference, kupper_hafner_inferred
from .krippendorff import coincidence_matrix, krippendorff_alpha
from .aggregation import summarize, observed_agreement, chance_corrected
from .workbook import Workbook
from .formulas import FormulaError, call_formula

__all__ = [
    'ReliabilityError',
    'StructuralError',
    'ClassificationError',
    'ConfigurationError',
    'ValidationError',
    'AgreementSummary',
    'CoincidenceMatrix',
    'Codebook',
    'ConflictRow',
    'Diff',
    'CellKind',
    'cell_kind',
    'cell_text',
    'parse_codes',
    'require_single_code',
    'map_grid',
    'map_rows',
    'load_codebook',
    'resolve_question_id',
    'coding_question',
    'final_name_mapping',
    'diff',
    'format_diff',
    'codes_agree',
    'find_conflicts',
    'conflict_resolved',
    'cohens_kappa',
    'approximate_cohens_kappa',
    'kupper_hafner_reference',
    'kupper_hafner_inferred',
    'coincidence_matrix',
    'krippendorff_alpha',
    'summarize',
    'observed_agreement',
    'chance_corrected',
    'Workbook',
    'FormulaError',
    'call_formula',
]
