"""
Internship Placement Portal
Lifecycle of internship postings, student applications and withdrawal
requests, across students, company representatives and career-center staff.

Architecture:
- domain/: entities + business rules (slot accounting, caps, eligibility)
- db/: SQLAlchemy engine and sessions, repositories (which double as read ports)
- services/: controller layer, one unit of work per mutation
- api/: FastAPI routers
"""

__version__ = "1.0.0"
