"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and LoanId wrap positive integers; services take them in signatures
    - All valid states encoded as Enums — no raw string matching
    - Enum values equal the database enum labels (role, status, report_type)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
LoanId = NewType("LoanId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles — maps to DB enum `role`."""
    ADMIN = "ADMIN"
    LIBRARIAN = "LIBRARIAN"
    STUDENT = "STUDENT"


class ItemStatus(str, Enum):
    """Lendable item availability — cached on the item row."""
    AVAILABLE = "AVAILABLE"
    BORROWED = "BORROWED"


class ReportType(str, Enum):
    """Research report degree level — maps to DB enum `report_type`."""
    PHD = "PHD"
    MASTER = "MASTER"
    BACHELOR = "BACHELOR"


class LendableKind(str, Enum):
    """The three kinds of item that can be the target of a loan."""
    BOOK = "book"
    JOURNAL = "journal"
    REPORT = "report"


class AuditAction(str, Enum):
    """State-changing operations recorded in the audit log."""
    REGISTER = "REGISTER"
    UPDATE = "UPDATE"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    DELETE = "DELETE"
    CREATE = "CREATE"
    BORROW = "BORROW"
    RETURN = "RETURN"
    SET_TARGET = "SET_TARGET"
