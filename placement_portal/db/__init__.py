"""
Database module - SQLAlchemy engine and sessions, repositories and demo data.
"""
from placement_portal.db.database import Database, get_database, reset_database
from placement_portal.db.seed import seed_demo_data

__all__ = [
    "Database",
    "get_database",
    "reset_database",
    "seed_demo_data",
]
