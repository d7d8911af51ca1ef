from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    COMMISSIONER = "COMMISSIONER"
    LANDLORD = "LANDLORD"
    TENANT = "TENANT"


SELF_REGISTER_ROLES = frozenset(
    {UserRole.TENANT, UserRole.LANDLORD, UserRole.COMMISSIONER}
)

# bcrypt input limit
PASSWORD_MAX_BYTES = 72

# upper bound of a 32-bit signed INTEGER column
MAX_DB_INT = 2**31 - 1


class PropertyType(str, Enum):
    HOUSE = "HOUSE"
    APARTMENT = "APARTMENT"
    PLOT = "PLOT"
    ROOM = "ROOM"


class PropertyStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    SOLD = "SOLD"


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    CONNECTED = "CONNECTED"
    COMPLETED = "COMPLETED"

    @property
    def next_status(self) -> "RequestStatus | None":
        return _REQUEST_FLOW.get(self)


_REQUEST_FLOW = {
    RequestStatus.PENDING: RequestStatus.CONNECTED,
    RequestStatus.CONNECTED: RequestStatus.COMPLETED,
}
