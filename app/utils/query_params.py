"""Normalization of raw feed query parameters."""

from typing import Any, Iterable, List, Optional, Union


def normalize_string(value: Any) -> str:
    """Trimmed string form of ``value``; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_skills(value: Optional[Union[str, Iterable[Any]]]) -> List[str]:
    """
    Flatten skills given as a list, a comma-separated string or both.

    Blank entries are dropped and order is preserved.

    Example:
        >>> normalize_skills("go, rust,")
        ['go', 'rust']
        >>> normalize_skills(["python", "go,rust"])
        ['python', 'go', 'rust']
        >>> normalize_skills(None)
        []
    """
    if value is None:
        return []

    raw_values = [value] if isinstance(value, str) else list(value)

    skills: List[str] = []
    for raw in raw_values:
        for part in normalize_string(raw).split(","):
            part = part.strip()
            if part:
                skills.append(part)
    return skills
