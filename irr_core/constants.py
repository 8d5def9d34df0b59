"""Configuration shared by the coding assistant."""

import re

CODES_SEPARATOR = ","

# Codebook sheet layout
CODEBOOK_HEADER_CODE = "Code"
CODEBOOK_HEADER_TYPE = "Type"
CODEBOOK_HEADER_FINAL = "Code - final"
CODEBOOK_TYPE_CODE = "code"
CODEBOOK_TYPE_FLAG = "flag"

# Sheet naming conventions
CODEBOOK_PATTERN = re.compile(r"(\w+?)_codebook")
CODING_PATTERN = re.compile(r"(\w+?)_codes(_\w+)?$")
FINAL_CODES_PATTERN = re.compile(r"(\w+?)_codes_final$")

# Conflict view
STATUS_AGREE = "agree"
STATUS_CONFLICT = "conflict"
ONLY_A_MARKER = "<"
ONLY_B_MARKER = ">"

# Interpretation thresholds (Krippendorff)
THRESHOLD_ACCEPTABLE = 0.80
THRESHOLD_TENTATIVE = 0.67


def codebook_sheet_name(question_id: str) -> str:
    return question_id + "_codebook"
