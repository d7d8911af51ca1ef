import pytest

from commands.create_admin import create_admin_user
from core.exceptions import DuplicatePhoneError
from models.enums import UserRole
from repos.user_repo import UserRepo


async def test_creates_verified_admin(session_factory, db):
    admin = await create_admin_user(
        session_factory, " Root Admin ", "+250 788 000 999", "admin-pass"
    )

    assert admin.role == UserRole.ADMIN
    assert admin.verified is True
    assert admin.name == "Root Admin"
    stored = await UserRepo(db).get_by_phone("+250788000999")
    assert stored.check_password("admin-pass")
    assert not stored.check_password("wrong")


async def test_rejects_duplicate_phone(session_factory):
    await create_admin_user(session_factory, "First", "+250788000998", "admin-pass")

    with pytest.raises(DuplicatePhoneError):
        await create_admin_user(session_factory, "Second", "+250788000998", "admin-pass")


@pytest.mark.parametrize(
    "name, phone, password",
    [
        ("", "+250788000997", "admin-pass"),
        ("Admin", "+250788000997", "123"),
        ("Admin", "12", "admin-pass"),
        ("Admin", "+250788000997", "p" * 73),
    ],
)
async def test_rejects_bad_input(session_factory, name, phone, password):
    with pytest.raises(ValueError):
        await create_admin_user(session_factory, name, phone, password)
