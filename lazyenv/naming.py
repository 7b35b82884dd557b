"""Environment variable names derived from Python identifiers."""

from __future__ import annotations


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def derive_env_name(identifier: str) -> str:
    """Convert an identifier into an upper snake case variable name.

    A separator goes before an uppercase letter when the previous letter is
    lowercase or the next one is, so acronyms stay together::

        >>> derive_env_name("HTTPServer")
        'HTTP_SERVER'
        >>> derive_env_name("UserID")
        'USER_ID'
        >>> derive_env_name("db_name")
        'DB_NAME'
    """
    parts: list[str] = []
    last = len(identifier) - 1
    for i, ch in enumerate(identifier):
        if i > 0 and _is_upper(ch):
            if _is_lower(identifier[i - 1]) or (i < last and _is_lower(identifier[i + 1])):
                parts.append("_")
        parts.append(ch)
    return "".join(parts).upper()


__all__ = ["derive_env_name"]
