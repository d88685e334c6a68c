"""
Sequential id generator - INT0001, APP0001, WRQ0001 ...

The next id is always derived from the highest id stored in the matching
table, so there is no hidden counter: an id handed out inside a unit of
work that later rolls back is simply reused by the next caller. Call it
inside the same db.session() as the save, so the read and the insert are
covered by one writer lock.
"""

import re
from typing import Iterable, Optional

from sqlalchemy import select

from placement_portal.db.database import Database, get_database
from placement_portal.models import ApplicationModel, InternshipModel, WithdrawalRequestModel

INTERNSHIP_PREFIX = "INT"
APPLICATION_PREFIX = "APP"
WITHDRAWAL_PREFIX = "WRQ"

PREFIX_COLUMNS = {
    INTERNSHIP_PREFIX: InternshipModel.internship_id,
    APPLICATION_PREFIX: ApplicationModel.application_id,
    WITHDRAWAL_PREFIX: WithdrawalRequestModel.request_id,
}


class SequentialIdGenerator:
    def __init__(self, db: Optional[Database] = None, width: int = 4):
        self.db = db or get_database()
        self.width = width

    def next_id(self, prefix: str) -> str:
        if prefix not in PREFIX_COLUMNS:
            raise ValueError(f"Unknown id prefix: {prefix}")
        with self.db.session() as session:
            stored = session.scalars(select(PREFIX_COLUMNS[prefix])).all()
            return f"{prefix}{highest_sequence(stored, prefix) + 1:0{self.width}d}"


def highest_sequence(ids: Iterable[str], prefix: str) -> int:
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    highest = 0
    for entity_id in ids:
        match = pattern.match(entity_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest
