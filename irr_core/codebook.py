"""Codebook classification and question resolution."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .cells import Cell, cell_text, parse_codes
from .constants import (
    CODEBOOK_PATTERN,
    CODEBOOK_TYPE_CODE,
    CODEBOOK_TYPE_FLAG,
    CODES_SEPARATOR,
    CODING_PATTERN,
    FINAL_CODES_PATTERN,
)
from .errors import ClassificationError, ConfigurationError
from .models import Codebook

logger = logging.getLogger(__name__)


def load_codebook(
    entries: Iterable[Tuple[Cell, Cell]],
    question_id: Optional[str] = None,
) -> Codebook:
    """Partition codebook entries into codes and flags.

    Args:
        entries: (code, type) pairs read from the codebook sheet
        question_id: Question the codebook belongs to, used in messages

    Returns:
        Codebook instance

    Raises:
        ClassificationError: if an entry has a type other than code or flag
    """
    codes: List[str] = []
    flags: List[str] = []

    for code, code_type in entries:
        code = cell_text(code).strip()
        if not code:
            # Tolerate holes in the codebook
            continue

        code_type = cell_text(code_type).strip() or CODEBOOK_TYPE_CODE
        if code_type == CODEBOOK_TYPE_CODE:
            codes.append(code)
        elif code_type == CODEBOOK_TYPE_FLAG:
            flags.append(code)
        else:
            where = f" in codebook {question_id}" if question_id else ""
            raise ClassificationError(f"unrecognized code type {code_type!r} for {code!r}{where}")

    logger.debug(
        "Loaded codebook %s: %d codes, %d flags", question_id, len(codes), len(flags)
    )
    return Codebook(codes=tuple(codes), flags=tuple(flags), question_id=question_id)


def coding_question(sheet_name: str) -> Optional[str]:
    """Return the question coded on a sheet, or None if it isn't a coding sheet."""
    match = CODING_PATTERN.search(sheet_name)
    return match.group(1) if match else None


def is_final_sheet(sheet_name: str) -> bool:
    return FINAL_CODES_PATTERN.search(sheet_name) is not None


def resolve_question_id(sheet_name: str) -> str:
    """Determine which question a sheet is associated with.

    Coding sheets (``q_codes``, ``q_codes_variant``) are tried first, then
    codebook sheets (``q_codebook``).

    Raises:
        ConfigurationError: if the sheet name matches neither convention
    """
    question = coding_question(sheet_name)
    if question is not None:
        return question

    match = CODEBOOK_PATTERN.search(sheet_name)
    if match:
        return match.group(1)

    raise ConfigurationError(
        f"can't figure out which question sheet {sheet_name} is associated with"
    )


def final_name_mapping(entries: Iterable[Tuple[Cell, Cell]]) -> Dict[str, str]:
    """Map every code to its final name; a blank final name keeps the code."""
    mapping: Dict[str, str] = {}
    for code, final in entries:
        code = cell_text(code).strip()
        if not code:
            continue
        mapping[code] = cell_text(final).strip() or code
    return mapping


def final_code_list(mapping: Dict[str, str]) -> List[str]:
    """Deduplicated final names, in codebook order."""
    return list(dict.fromkeys(mapping.values()))


def rename_codes(cell: Cell, mapping: Dict[str, str]) -> str:
    """Replace every code in a cell by its final name.

    Raises:
        ClassificationError: if a code is missing from the mapping
    """
    renamed = []
    for code in parse_codes(cell):
        if code not in mapping:
            raise ClassificationError(f"{code} not found in codebook")
        renamed.append(mapping[code])
    return CODES_SEPARATOR.join(renamed)
