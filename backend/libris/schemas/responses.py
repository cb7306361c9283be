"""Response Schemas — public shapes of persisted rows.

Invariants:
    - UserResponse never exposes the password hash
    - Built from ORM rows via from_attributes
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from libris.core.domain_types import Role


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime


class LoanResponse(BaseModel):
    """Borrowing record of any kind; item_id is the book/journal/report id."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    item_id: int
    borrow_date: datetime
    due_date: datetime
    return_date: datetime | None
    is_open: bool
