# social_dashboard/errors.py
"""
Exception taxonomy shared by services and routers.
"""
from typing import Optional, Dict, Any


class DashboardError(Exception):
    """Base class for errors that map onto a caller-visible condition"""
    status_code = 500

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"detail": str(self), "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(DashboardError):
    """Caller input violates an invariant; nothing was mutated"""
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class AuthenticationError(DashboardError):
    status_code = 401

    def __init__(self, message: str = "authentication required", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="AUTHENTICATION_ERROR", details=details)


class NotFoundError(DashboardError):
    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any, details: Optional[Dict[str, Any]] = None):
        message = f"{resource_type} '{resource_id}' not found"
        super().__init__(message, code="NOT_FOUND", details=details)


class PlatformDeliveryError(DashboardError):
    """Raised by a platform sender; converted into a failed outcome by the publisher"""

    def __init__(self, platform: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="PLATFORM_DELIVERY_ERROR", details=details)
        self.platform = platform


class UpstreamServiceError(DashboardError):
    status_code = 502

    def __init__(self, message: str, code: str = "UPSTREAM_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class RateLimitedError(UpstreamServiceError):
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded. Please try again later.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="RATE_LIMITED", details=details)


class QuotaExceededError(UpstreamServiceError):
    status_code = 402

    def __init__(self, message: str = "Payment required. Please add credits to your account.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="QUOTA_EXCEEDED", details=details)
