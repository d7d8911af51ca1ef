import itertools
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_VERSION"] = "v1"

import pytest
from fastapi.testclient import TestClient

from app import app
from commands.create_admin import create_admin_user
from core.breaker import breaker
from core.get_db import build_engine, build_session_factory, create_tables
from models.enums import PropertyType, UserRole
from repos.property_repo import PropertyRepo
from repos.user_repo import UserRepo

ADMIN_PASSWORD = "admin-pass"
DEFAULT_PASSWORD = "secret123"

_phone_numbers = itertools.count(1)


def next_phone() -> str:
    return f"+25078{next(_phone_numbers):07d}"


@pytest.fixture(autouse=True)
def reset_breaker():
    breaker.reset()
    yield
    breaker.reset()


# Service-level fixtures


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db):
    async def factory(role=UserRole.TENANT, verified=True, password=DEFAULT_PASSWORD):
        return await UserRepo(db).create(
            name=f"{role.value.title()} User",
            phone=next_phone(),
            role=role,
            password=password,
            verified=verified,
            rounds=4,
        )

    return factory


@pytest.fixture
def make_property(db):
    async def factory(owner, **overrides):
        fields = {
            "title": "Two bedroom flat",
            "property_type": PropertyType.APARTMENT,
            "price": 150000,
            "location": "Kigali, Gasabo",
            "rooms": 2,
        }
        fields.update(overrides)
        return await PropertyRepo(db).create(owner_id=owner.id, **fields)

    return factory


# HTTP fixtures


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class Api:
    prefix = "/v1"

    def __init__(self, client: TestClient):
        self.client = client

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    @staticmethod
    def auth(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    def register(self, role="TENANT", phone=None, password=DEFAULT_PASSWORD, **extra):
        payload = {
            "name": f"{role.title()} Person",
            "phone": phone or next_phone(),
            "password": password,
            "role": role,
        }
        payload.update(extra)
        return self.client.post(self.url("/users/register"), json=payload)

    def login(self, phone, password=DEFAULT_PASSWORD) -> str:
        response = self.client.post(
            self.url("/users/login"), json={"phone": phone, "password": password}
        )
        assert response.status_code == 200, response.text
        return response.json()["data"]["token"]

    def create_admin(self):
        phone = next_phone()
        admin = self.client.portal.call(
            create_admin_user,
            self.client.app.state.session_factory,
            "Platform Admin",
            phone,
            ADMIN_PASSWORD,
        )
        return admin, self.login(phone, ADMIN_PASSWORD)

    def verify_user(self, user_id, admin_token):
        response = self.client.patch(
            self.url(f"/users/{user_id}/verify"), headers=self.auth(admin_token)
        )
        assert response.status_code == 200, response.text
        return response.json()["data"]

    def verified_user(self, role, admin_token):
        response = self.register(role=role)
        assert response.status_code == 201, response.text
        user = response.json()["data"]
        self.verify_user(user["id"], admin_token)
        return user, self.login(user["phone"])

    def create_property(self, token, **overrides):
        payload = {
            "title": "Two bedroom flat",
            "type": "APARTMENT",
            "price": 150000,
            "location": "Kigali, Gasabo",
            "rooms": 2,
        }
        payload.update(overrides)
        return self.client.post(
            self.url("/properties"), json=payload, headers=self.auth(token)
        )


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def admin(api):
    return api.create_admin()


@pytest.fixture
def admin_token(admin):
    return admin[1]
