# Utilities package
from .pagination import MAX_SQL_INTEGER, calculate_offset, clamp_limit, max_page_for, parse_positive_int
from .query_params import normalize_string, normalize_skills

__all__ = [
    "MAX_SQL_INTEGER",
    "calculate_offset",
    "max_page_for",
    "clamp_limit",
    "parse_positive_int",
    "normalize_string",
    "normalize_skills",
]
