import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import (
    DuplicatePendingRequestError,
    ForbiddenError,
    InvalidStateTransitionError,
)
from models.enums import PropertyStatus, RequestStatus, UserRole
from models.models import Property, RentalRequest
from repos.request_repo import RequestRepo
from schemas.schema import RequestCreate
from security.security_generate import Identity
from services.request_service import RequestService


def identity_of(user):
    return Identity(user.id, user.role, user.phone)


@pytest.fixture
async def pending(db, make_user, make_property):
    admin = await make_user(UserRole.ADMIN)
    landlord = await make_user(UserRole.LANDLORD)
    tenant = await make_user(UserRole.TENANT)
    prop = await make_property(landlord)
    created = await RequestService(db).create_request(
        RequestCreate(property_id=prop.id), identity_of(tenant)
    )
    return admin.id, tenant.id, prop.id, created


async def reload(db, model, pk):
    return await db.get(model, pk, populate_existing=True)


async def test_storage_rejects_second_pending_request(db, pending):
    _, tenant_id, property_id, _ = pending

    with pytest.raises(DuplicatePendingRequestError):
        await RequestRepo(db).create(tenant_id=tenant_id, property_id=property_id)


async def test_admin_can_open_request_for_tenant(db, make_user, make_property):
    admin = await make_user(UserRole.ADMIN)
    tenant = await make_user(UserRole.TENANT)
    prop = await make_property(await make_user(UserRole.LANDLORD))

    created = await RequestService(db).create_request(
        RequestCreate(property_id=prop.id, tenant_id=tenant.id), identity_of(admin)
    )

    assert created.tenant_id == tenant.id


async def test_connect_rechecks_admin_role(db, pending):
    _, tenant_id, _, created = pending

    with pytest.raises(ForbiddenError):
        await RequestService(db).connect(created.id, tenant_id)

    assert (await reload(db, RentalRequest, created.id)).status == RequestStatus.PENDING


async def test_complete_is_atomic(db, pending, monkeypatch):
    admin_id, _, property_id, created = pending
    service = RequestService(db)
    await service.connect(created.id, admin_id)

    async def failing_update(self, property_id):
        raise OperationalError("UPDATE properties", {}, Exception("database is locked"))

    monkeypatch.setattr(RequestRepo, "_mark_property_rented", failing_update)

    with pytest.raises(OperationalError):
        await service.complete(created.id)

    assert (await reload(db, RentalRequest, created.id)).status == RequestStatus.CONNECTED
    assert (await reload(db, Property, property_id)).status == PropertyStatus.AVAILABLE


async def test_complete_updates_request_and_property_together(db, pending):
    admin_id, _, property_id, created = pending
    service = RequestService(db)
    await service.connect(created.id, admin_id)

    result = await service.complete(created.id)

    assert result.status == RequestStatus.COMPLETED
    assert (await reload(db, RentalRequest, created.id)).status == RequestStatus.COMPLETED
    assert (await reload(db, Property, property_id)).status == PropertyStatus.RENTED


async def test_guarded_write_loses_to_concurrent_transition(db, pending):
    admin_id, _, _, created = pending
    repo = RequestRepo(db)

    assert await repo.connect(created.id, admin_id) is True
    assert await repo.connect(created.id, admin_id) is False


async def test_status_validator_blocks_skips_and_reversals(db, pending):
    _, _, _, created = pending
    rental_request = await reload(db, RentalRequest, created.id)

    with pytest.raises(ValueError):
        rental_request.status = RequestStatus.COMPLETED

    rental_request.status = RequestStatus.CONNECTED
    with pytest.raises(ValueError):
        rental_request.status = RequestStatus.PENDING


async def test_invalid_transition_message(db, pending):
    _, _, _, created = pending

    with pytest.raises(InvalidStateTransitionError, match="must be CONNECTED"):
        await RequestService(db).complete(created.id)
