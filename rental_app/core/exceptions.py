from typing import Dict, List, Optional


class AppError(Exception):
    """Base for failures that carry their own HTTP status and client message."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


# Categories


class InvalidInputError(AppError):
    status_code = 400
    default_message = "Validation failed"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Unauthorized access"


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Forbidden: Insufficient permissions"


class ConflictError(AppError):
    status_code = 400
    default_message = "Request conflicts with the current state"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


class ServiceUnavailableError(AppError):
    status_code = 503
    default_message = "Service temporarily unavailable. Please try again shortly."


# Users


class DuplicatePhoneError(ConflictError):
    default_message = "User with this phone number already exists"


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


# Auth


class InvalidTokenError(AuthenticationError):
    default_message = "Invalid or expired token"


class MissingTokenError(AuthenticationError):
    default_message = "Access token required"


class UnauthenticatedError(AuthenticationError):
    default_message = "Authentication required"


class ForbiddenError(AuthorizationError):
    default_message = "Insufficient permissions"


# Properties


class PropertyNotFoundError(NotFoundError):
    default_message = "Property not found"


class OwnerNotFoundError(NotFoundError):
    default_message = "Owner not found"


class OwnerNotVerifiedError(ConflictError):
    default_message = "Owner must be verified to create properties"


class NotPropertyOwnerError(AuthorizationError):
    default_message = "Unauthorized to update this property"


class PropertyUnavailableError(ConflictError):
    default_message = "Property is not available"


# Requests


class RequestNotFoundError(NotFoundError):
    default_message = "Request not found"


class TenantNotFoundError(NotFoundError):
    default_message = "Tenant not found"


class TenantNotVerifiedError(ConflictError):
    default_message = "Tenant must be verified to submit requests"


class DuplicatePendingRequestError(ConflictError):
    default_message = "You already have a pending request for this property"


class InvalidStateTransitionError(ConflictError):
    default_message = "Request cannot move to the requested status"


# Commissions


class CommissionNotFoundError(NotFoundError):
    default_message = "Commission not found"


class CommissionerNotFoundError(NotFoundError):
    default_message = "Commissioner not found"


class WrongRoleError(ConflictError):
    default_message = "User must be a commissioner"


class CommissionerNotVerifiedError(ConflictError):
    default_message = "Commissioner must be verified"
