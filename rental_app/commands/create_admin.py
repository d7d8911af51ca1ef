"""
commands/create_admin.py

Admins cannot self-register through the API. Run this once from the
rental_app directory to seed a verified admin account:

    python -m commands.create_admin

You will be prompted for name, phone and password.
"""

import asyncio
import getpass
import logging
import sys

from core.exceptions import DuplicatePhoneError
from core.get_db import build_engine, build_session_factory, create_tables
from core.settings import settings
from models.enums import PASSWORD_MAX_BYTES, UserRole
from repos.user_repo import UserRepo
from schemas.schema import UserPublicSchema, normalize_phone

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


async def create_admin_user(session_factory, name: str, phone: str, password: str):
    name = name.strip()
    if not name or not phone.strip() or not password:
        raise ValueError("Name, phone and password are required.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.")
    phone = normalize_phone(phone.strip())

    async with session_factory() as db:
        repo = UserRepo(db)
        if await repo.get_by_phone(phone):
            raise DuplicatePhoneError()
        admin = await repo.create(
            name=name,
            phone=phone,
            role=UserRole.ADMIN,
            password=password,
            verified=True,
            rounds=settings.BCRYPT_ROUNDS,
        )
        return UserPublicSchema.model_validate(admin)


async def run():
    print("\n-- Create Admin User --------------------")

    name = input("Full name:          ").strip()
    phone = input("Phone (+250...):    ").strip()
    password = getpass.getpass("Password:           ")
    confirm = getpass.getpass("Confirm password:   ")

    if password != confirm:
        print("Passwords do not match.")
        sys.exit(1)

    engine = build_engine(settings.DATABASE_URL)
    try:
        if settings.AUTO_CREATE_TABLES:
            await create_tables(engine)
        admin = await create_admin_user(
            build_session_factory(engine), name, phone, password
        )
    except (ValueError, DuplicatePhoneError) as e:
        print(f"Failed: {e}")
        sys.exit(1)
    finally:
        await engine.dispose()

    logger.info("Admin %s created", admin.id)
    print("\nAdmin user created successfully!")
    print(f"   ID:    {admin.id}")
    print(f"   Name:  {admin.name}")
    print(f"   Phone: {admin.phone}\n")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(run())
