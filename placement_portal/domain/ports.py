"""
Read ports - narrow query-only capabilities through which an entity
consults aggregate state it does not own.

Entities never import the repositories; the repositories implement these
protocols and get passed in by the service layer (or by a stub in tests).
"""

from typing import Protocol


class AppReadPort(Protocol):
    """Aggregate view over a student's applications."""

    def count_active_applications(self, student_id: str) -> int:
        ...

    def has_confirmed_placement(self, student_id: str) -> bool:
        ...


class RepPostingReadPort(Protocol):
    """Aggregate view over a representative's postings."""

    def count_active_postings_for_rep(self, rep_id: str) -> int:
        ...


class IdGenerator(Protocol):
    """Hands out the next identifier for an entity kind ("INT", "APP", "WRQ")."""

    def next_id(self, prefix: str) -> str:
        ...
