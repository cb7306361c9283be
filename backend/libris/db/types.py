"""Shared Column Types — database enums reused across tables.

Invariants:
    - Each database enum is declared exactly once (status is shared by three tables)
    - Labels equal the Python Enum values
"""

from sqlalchemy import Enum

from libris.core.domain_types import ItemStatus, ReportType, Role

RoleType = Enum(Role, name="role")
ItemStatusType = Enum(ItemStatus, name="status")
ReportTypeType = Enum(ReportType, name="report_type")
