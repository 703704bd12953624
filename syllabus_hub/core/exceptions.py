"""
Custom Exceptions for Campus Syllabus Hub
=========================================

Endpoints and services raise these instead of building HTTP responses
by hand; the handlers registered in main.py turn them into JSON with the
status code carried by the exception.

Usage:
    from syllabus_hub.core.exceptions import ResourceNotFoundError

    if not subject:
        raise ResourceNotFoundError("Subject", code)
"""

from typing import Optional, Any, Dict


class CampusHubError(Exception):
    """Base exception for all Campus Syllabus Hub errors"""

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
# Authorization Errors
# ============================================

class AuthorizationError(CampusHubError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Not Found Errors (404-type)
# ============================================

class ResourceNotFoundError(CampusHubError):
    """A referenced row does not exist (or is not visible to the caller)"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        message = f"{resource_type} not found"
        if resource_id:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message,
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(CampusHubError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class SearchQueryRequiredError(ValidationError):
    """Search-only endpoint called without q"""

    def __init__(self):
        super().__init__("Search query is required", field="q")
        self.code = "SEARCH_QUERY_REQUIRED"


class DuplicateRecordError(ValidationError):
    """A unique field (email, branch code, subject code) is already taken"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field=field)
        self.code = "DUPLICATE_RECORD"


class DependentRecordsError(ValidationError):
    """Catalog row still has children referencing it"""

    def __init__(self, entity: str, dependents: str, count: int):
        noun = dependents if count != 1 else dependents.rstrip("s")
        super().__init__(
            f"Cannot delete {entity.lower()}. It has {count} associated {noun}."
        )
        self.code = "HAS_DEPENDENTS"
        self.details = {"entity": entity, "dependents": dependents, "count": count}


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: CampusHubError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "detail": error.message,
        "error": error.to_dict()
    }
