"""
Field helpers shared by the entity constructors.
"""

from enum import Enum
from typing import Optional, Type, TypeVar

from placement_portal.core.exceptions import ValidationError

MAX_NOTE_LENGTH = 2000

E = TypeVar("E", bound=Enum)


def require_text(value: Optional[str], field: str) -> str:
    """Return value stripped, or raise if it is missing/blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def require_enum(value, enum_cls: Type[E], field: str) -> E:
    """Accept an enum member or its (case-insensitive) name."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return enum_cls[value.strip().upper()]
        except KeyError:
            pass
    raise ValidationError(f"{field} must be one of: {', '.join(m.name for m in enum_cls)}")


def sanitize_note(value: Optional[str]) -> str:
    """Free text is stored trimmed and capped; None becomes empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Note must be text")
    text = value.strip()
    return text[:MAX_NOTE_LENGTH]
