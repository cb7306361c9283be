"""Referential integrity — verifies the schema, not the services, is the authority.

Tests:
    - UNIQUE(email) rejects a duplicate that bypasses the pre-screen
    - The driver message is kept in debug_info and never reaches the envelope
    - ON DELETE RESTRICT blocks deleting a user or book that a loan references
    - ON UPDATE CASCADE carries a changed user id into loan rows
"""

import pytest
from sqlalchemy import delete, select, text
from sqlalchemy.exc import IntegrityError

from libris.core.domain_types import LendableKind, Role
from libris.core.errors import ConstraintViolationError
from libris.infrastructure.database import flush_or_conflict
from libris.models.book import Book
from libris.models.user import User
from libris.models.user_book import UserBook
from libris.services.loans import LoanService


async def test_unique_email_enforced_at_write_time(test_db, student):
    test_db.add(User(
        name="Impostor", email="ada@example.com", password="x", role=Role.STUDENT,
    ))
    with pytest.raises(ConstraintViolationError) as exc_info:
        await flush_or_conflict(test_db, "register_user")
    assert exc_info.value.operation == "register_user"


async def test_constraint_driver_message_kept_out_of_envelope(test_db, student):
    test_db.add(User(
        name="Impostor", email="ada@example.com", password="x", role=Role.STUDENT,
    ))
    with pytest.raises(ConstraintViolationError) as exc_info:
        await flush_or_conflict(test_db, "register_user")

    debug_info = exc_info.value.context.debug_info
    assert "unique" in debug_info["driver_error"].lower()
    envelope = exc_info.value.to_response()
    assert "debug_info" not in envelope["error"]["context"]
    assert debug_info["driver_error"] not in str(envelope)


async def test_deleting_user_with_open_loan_is_restricted(test_db, student, book):
    student_id = student.id
    await LoanService(test_db).borrow_item(LendableKind.BOOK, student_id, book.id)

    await test_db.delete(student)
    with pytest.raises(ConstraintViolationError):
        await flush_or_conflict(test_db, "delete_user")

    remaining = await test_db.scalar(select(UserBook.id).where(UserBook.user_id == student_id))
    assert remaining is not None


async def test_deleting_borrowed_book_is_restricted(test_db, student, book):
    await LoanService(test_db).borrow_item(LendableKind.BOOK, student.id, book.id)

    with pytest.raises(IntegrityError):
        await test_db.execute(delete(Book).where(Book.id == book.id))


async def test_user_id_change_cascades_to_loans(test_db, student, book):
    loan = await LoanService(test_db).borrow_item(LendableKind.BOOK, student.id, book.id)

    await test_db.execute(
        text("UPDATE users SET id = :new WHERE id = :old"),
        {"new": 500, "old": student.id},
    )
    await test_db.commit()

    user_id = await test_db.scalar(
        select(UserBook.user_id).where(UserBook.id == loan.id),
    )
    assert user_id == 500
