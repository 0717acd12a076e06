"""
Custom Exceptions for CampusOps
===============================

Every error a request can end in is one of these. The API layer turns them
into a JSON body through `error_response()` and the status code carried on
the class.

Usage:
    from app.core.exceptions import ResourceNotFoundError

    course = await storage.courses.get(course_id)
    if course is None:
        raise ResourceNotFoundError("Course", course_id)
"""

from typing import Optional, Any, Dict, List


class CampusOpsError(Exception):
    """Base exception for all CampusOps errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(CampusOpsError):
    """No valid session (missing, malformed or expired token)"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class TokenExpiredError(AuthenticationError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")
        self.code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class AuthorizationError(CampusOpsError):
    """Authenticated, but the role or ownership check failed"""

    status_code = 403

    def __init__(self, message: str = "Forbidden - Insufficient permissions"):
        super().__init__(message, code="FORBIDDEN")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(CampusOpsError):
    """Operation targeted an id that does not exist"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} not found",
            code="NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationFailedError(CampusOpsError):
    """Payload shape, type, enum or bound violation"""

    status_code = 400

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message, code="VALIDATION_FAILED", details={"errors": errors})

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailedError":
        return cls([{"field": field, "message": message}])


# ============================================
# Conflict Errors (409-type)
# ============================================

class ConflictError(CampusOpsError):
    """Request clashes with the current state of the store"""

    status_code = 409

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFLICT", details=details)


class DuplicateUsernameError(ConflictError):
    """Username is already taken"""

    def __init__(self, username: str):
        super().__init__("Username already exists", details={"username": username})
        self.code = "USERNAME_TAKEN"


class ReferencedRowError(ConflictError):
    """Delete refused because other rows still point at this one"""

    def __init__(self, resource_type: str, resource_id: Any, referenced_by: List[str]):
        super().__init__(
            f"{resource_type} is still referenced by {', '.join(referenced_by)}",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id,
                "referenced_by": referenced_by,
            }
        )
        self.code = "STILL_REFERENCED"


# ============================================
# Storage Errors (500-type)
# ============================================

class StorageError(CampusOpsError):
    """Backing store failed; the cause is logged, never returned"""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: CampusOpsError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
