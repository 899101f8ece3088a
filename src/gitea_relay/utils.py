from typing import Iterable


def dedup_strings(values: Iterable[str]) -> list[str]:
    """Return the values with duplicates removed, keeping first occurrences."""
    return list(dict.fromkeys(values))


def first_non_empty(*values: str) -> str:
    for value in values:
        if value:
            return value
    return ""
