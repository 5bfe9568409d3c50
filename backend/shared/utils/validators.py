"""
Input helpers shared by the domain services.
"""

from shared.config.constants import Limits

LIKE_ESCAPE = "\\"


def escape_like_pattern(value: str) -> str:
    """
    Escape LIKE wildcards so user input only matches literally.

    The escape character itself is escaped first.
    """
    if not value:
        return value
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def contains_pattern(search: str) -> str:
    """
    Case-insensitive "contains" pattern for a search term.

    Use with func.lower(column).like(pattern, escape=LIKE_ESCAPE).
    Terms longer than MAX_SEARCH_TERM_LENGTH are truncated.
    """
    term = search.strip()[: Limits.MAX_SEARCH_TERM_LENGTH].lower()
    return f"%{escape_like_pattern(term)}%"
