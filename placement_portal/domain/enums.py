"""
Fixed vocabularies that drive transition legality.
"""

from enum import Enum


class InternshipStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CLOSED = "CLOSED"
    FILLED = "FILLED"


class InternshipLevel(str, Enum):
    BASIC = "BASIC"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"            # submitted, awaiting the company's decision
    SUCCESSFUL = "SUCCESSFUL"      # offer made
    UNSUCCESSFUL = "UNSUCCESSFUL"  # terminal
    WITHDRAWN = "WITHDRAWN"        # terminal


class WithdrawalRequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
