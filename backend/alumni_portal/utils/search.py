"""
Helpers for directory filters and free-text member search.

Result sets are always capped; LIKE escaping is left to SQLAlchemy's
``icontains(..., autoescape=True)``.
"""
from typing import Optional

from alumni_portal.core.exceptions import ValidationError


def clamp_limit(limit: Optional[int], cap: int) -> int:
    """Requested page size, never above ``cap``"""
    if limit is None or limit <= 0:
        return cap
    return min(limit, cap)


def parse_year(value: str, field: str = "graduationYear") -> int:
    """Parse a year query parameter; non-numeric input is a 400"""
    try:
        return int(value.strip())
    except ValueError:
        raise ValidationError(f"{field}: must be an integer", field=field)
