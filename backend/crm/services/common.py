from typing import Iterable

# Largest value a 64-bit SQL integer (LIMIT / OFFSET) accepts.
MAX_SQL_INTEGER = 2**63 - 1


def search_pattern(term: str) -> str:
    return f"%{term.strip().lower()}%"


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Trim tags and drop blanks and duplicates, keeping first occurrence order."""
    cleaned: list[str] = []
    for tag in tags or ():
        value = tag.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
