"""User Service — verifies registration, lookup, updates and deletion rules.

Tests:
    - Registration stores the hash, normalized email and a REGISTER audit row
    - Duplicate email pre-screened on register and update
    - Listing filters by role/search and paginates with an unpaginated total
    - Password change requires the current password
    - Deleting a user with an open loan raises ActiveLoansError
"""

import pytest
from sqlalchemy import select

from libris.core.domain_types import AuditAction, LendableKind, Role
from libris.core.errors import (
    ActiveLoansError, ConstraintViolationError, DuplicateEmailError,
    InvalidCredentialsError, ResourceNotFoundError,
)
from libris.models.audit_log import AuditLog
from libris.models.user import User
from libris.schemas.auth import (
    ChangePassword, LoginUser, RegisterUser, UpdateUser, UserIdParam, UserQuery,
)
from libris.schemas.fields import MAX_DB_INT
from libris.schemas.validation import validate
from libris.services.loans import LoanService
from libris.services.users import UserService


def _register_payload(email=" New@Example.COM ", role="STUDENT"):
    return validate(RegisterUser, {
        "name": " New User ", "email": email, "password": "Secret1", "role": role,
    }).unwrap()


async def test_register_persists_normalized_user(test_db, hasher):
    user = await UserService(test_db, hasher).register_user(_register_payload())

    assert user.id is not None
    assert user.email == "new@example.com"
    assert user.name == "New User"
    assert user.password == "hashed:Secret1"
    assert user.role == Role.STUDENT


async def test_register_writes_audit_row(test_db, hasher):
    user = await UserService(test_db, hasher).register_user(_register_payload())

    rows = (await test_db.execute(
        select(AuditLog).where(AuditLog.user_id == user.id),
    )).scalars().all()
    assert [r.action for r in rows] == [AuditAction.REGISTER.value]
    assert rows[0].entity == "users"


async def test_register_duplicate_email_rejected(test_db, hasher, student):
    with pytest.raises(DuplicateEmailError) as exc_info:
        await UserService(test_db, hasher).register_user(
            _register_payload(email="ADA@example.com"),
        )
    assert exc_info.value.http_status == 409


async def test_authenticate(test_db, hasher, student):
    service = UserService(test_db, hasher)
    user = await service.authenticate(
        LoginUser(email="ada@example.com", password="Secret1"),
    )
    assert user.id == student.id

    with pytest.raises(InvalidCredentialsError):
        await service.authenticate(LoginUser(email="ada@example.com", password="nope"))
    with pytest.raises(InvalidCredentialsError):
        await service.authenticate(LoginUser(email="ghost@example.com", password="x"))


async def test_get_user_missing(test_db, hasher):
    with pytest.raises(ResourceNotFoundError):
        await UserService(test_db, hasher).get_user(404)


async def test_list_users_filters_and_paginates(test_db, hasher, student, librarian, seed):
    await seed(User(
        name="Adam Second", email="adam@example.com",
        password="hashed:x", role=Role.STUDENT,
    ))
    service = UserService(test_db, hasher)

    students, total = await service.list_users(UserQuery(role=Role.STUDENT))
    assert total == 2
    assert [u.email for u in students] == ["ada@example.com", "adam@example.com"]

    found, total = await service.list_users(UserQuery(search="LIB"))
    assert total == 1
    assert found[0].id == librarian.id

    page_two, total = await service.list_users(UserQuery(page=2, limit=2))
    assert total == 3
    assert len(page_two) == 1


async def test_search_treats_wildcards_literally(test_db, hasher, student):
    found, total = await UserService(test_db, hasher).list_users(UserQuery(search="%"))
    assert total == 0
    assert found == []


async def test_update_applies_only_sent_fields(test_db, hasher, student):
    update = validate(UpdateUser, {"name": "Ada Lovelace"}).unwrap()
    user = await UserService(test_db, hasher).update_user(student.id, update)

    assert user.name == "Ada Lovelace"
    assert user.email == "ada@example.com"
    assert user.role == Role.STUDENT


async def test_update_duplicate_email_rejected(test_db, hasher, student, librarian):
    update = validate(UpdateUser, {"email": "LIB@example.com"}).unwrap()
    with pytest.raises(DuplicateEmailError):
        await UserService(test_db, hasher).update_user(student.id, update)


async def test_update_keeping_own_email_is_allowed(test_db, hasher, student):
    update = validate(UpdateUser, {"email": "ada@example.com"}).unwrap()
    user = await UserService(test_db, hasher).update_user(student.id, update)
    assert user.email == "ada@example.com"


async def test_change_password(test_db, hasher, student):
    service = UserService(test_db, hasher)
    payload = validate(ChangePassword, {
        "currentPassword": "Secret1", "newPassword": "Better22", "confirmPassword": "Better22",
    }).unwrap()

    await service.change_password(student.id, payload)
    assert student.password == "hashed:Better22"


async def test_change_password_wrong_current(test_db, hasher, student):
    payload = validate(ChangePassword, {
        "currentPassword": "wrong", "newPassword": "Better22", "confirmPassword": "Better22",
    }).unwrap()
    with pytest.raises(InvalidCredentialsError):
        await UserService(test_db, hasher).change_password(student.id, payload)
    assert student.password == "hashed:Secret1"


async def test_delete_user_without_history(test_db, hasher, student):
    await UserService(test_db, hasher).delete_user(student.id)
    assert await test_db.get(User, student.id) is None


async def test_delete_user_with_open_loan_rejected(test_db, hasher, student, book):
    await LoanService(test_db).borrow_item(LendableKind.BOOK, student.id, book.id)

    with pytest.raises(ActiveLoansError) as exc_info:
        await UserService(test_db, hasher).delete_user(student.id)
    assert exc_info.value.open_loans == 1
    assert await test_db.get(User, student.id) is not None


async def test_delete_registered_user_restricted_by_history(test_db, hasher):
    service = UserService(test_db, hasher)
    user = await service.register_user(_register_payload())
    user_id = user.id

    with pytest.raises(ConstraintViolationError):
        await service.delete_user(user_id)

    assert (await service.get_user(user_id)).id == user_id
    audit_actions = await test_db.scalars(
        select(AuditLog.action).where(AuditLog.user_id == user_id),
    )
    assert list(audit_actions) == [AuditAction.REGISTER.value]


async def test_largest_accepted_id_and_page_reach_the_database(test_db, hasher, student):
    service = UserService(test_db, hasher)
    user_id = validate(UserIdParam, {"id": str(MAX_DB_INT)}).unwrap().id
    with pytest.raises(ResourceNotFoundError):
        await service.get_user(user_id)

    query = validate(UserQuery, {"page": str(MAX_DB_INT), "limit": "100"}).unwrap()
    users, total = await service.list_users(query)
    assert users == []
    assert total == 1
