"""
Content validation utilities

Local checks run before any store call. They only verify presence and
shape; uniqueness and referential checks belong to the store.
"""

import re
from typing import Any, Iterable, List, Mapping

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
_SLUG_RE = re.compile(SLUG_PATTERN)


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_required_fields(
    values: Mapping[str, Any], required: Iterable[str]
) -> List[str]:
    """Return the required field names whose value is absent or blank."""
    return [name for name in required if is_blank(values.get(name))]


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_RE.match(slug or ""))