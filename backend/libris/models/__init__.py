"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the root identity entity; loans, targets and audit rows reference it
    - Every foreign key is ON DELETE RESTRICT ON UPDATE CASCADE

Design Decisions:
    - One file per entity for locality; the three loan tables share LoanMixin
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from libris.models.user import User  # noqa: F401
from libris.models.book import Book  # noqa: F401
from libris.models.journal import Journal  # noqa: F401
from libris.models.research_report import ResearchReport  # noqa: F401
from libris.models.user_book import UserBook  # noqa: F401
from libris.models.user_journal import UserJournal  # noqa: F401
from libris.models.user_report import UserReport  # noqa: F401
from libris.models.book_target import BookTarget  # noqa: F401
from libris.models.audit_log import AuditLog  # noqa: F401
