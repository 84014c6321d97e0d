"""
Custom Exceptions for the Alumni Portal
=======================================

Raise these from services and dependencies instead of building HTTP
responses by hand. The handlers registered in ``alumni_portal.main`` turn
every ``AlumniPortalError`` into ``{"error": <message>}`` with the
exception's ``status_code``.

Usage:
    from alumni_portal.core.exceptions import NotFoundError

    if not post:
        raise NotFoundError("Post", post_id)
"""

from typing import Optional, Any, Dict


class AlumniPortalError(Exception):
    """Base exception for all Alumni Portal errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(AlumniPortalError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(AlumniPortalError):
    """Credentials or session token rejected"""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="AUTH_FAILED")


class UnauthenticatedError(AuthenticationError):
    """No bearer token on a protected route"""

    def __init__(self):
        super().__init__("No token provided")
        self.code = "NO_TOKEN"


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid"""

    def __init__(self):
        super().__init__("Invalid token")
        self.code = "INVALID_TOKEN"


class TokenExpiredError(AuthenticationError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")
        self.code = "TOKEN_EXPIRED"


class ForbiddenError(AlumniPortalError):
    """Authenticated, but not allowed to do this"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="FORBIDDEN")


class AccountRejectedError(ForbiddenError):
    """Login attempt by a member whose signup was rejected"""

    def __init__(self):
        super().__init__("Your account has been rejected")
        self.code = "ACCOUNT_REJECTED"


# ============================================
# Resource Errors
# ============================================

class NotFoundError(AlumniPortalError):
    """Resource with the given id does not exist"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        message = f"{resource_type} not found"
        super().__init__(
            message,
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ConflictError(AlumniPortalError):
    """Unique constraint would be violated"""

    status_code = 409

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="CONFLICT", details=details)


__all__ = [
    "AlumniPortalError",
    "ValidationError",
    "AuthenticationError",
    "UnauthenticatedError",
    "InvalidTokenError",
    "TokenExpiredError",
    "ForbiddenError",
    "AccountRejectedError",
    "NotFoundError",
    "ConflictError",
]
