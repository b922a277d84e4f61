"""Custom exception classes for Dev Radar.

All exceptions follow the error format:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "details": {}  # optional
    }
}

Error messages must not contain platform handles or tokens.
"""

from __future__ import annotations

from typing import Any


class DevRadarError(Exception):
    """Base exception for Dev Radar."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class PlatformAPIError(DevRadarError):
    """Upstream platform API returned an error, timed out or sent garbage.

    ``reason`` is one of "status" (non-2xx response), "transport"
    (connection or timeout) or "payload" (undecodable or unexpected body).
    """

    def __init__(
        self,
        platform: str,
        message: str,
        status_code: int = 502,
        reason: str = "status",
    ) -> None:
        super().__init__(
            code=f"{platform.upper()}_API_ERROR",
            message=message,
            status_code=status_code,
            details={"platform": platform, "reason": reason},
        )
        self.platform = platform
        self.reason = reason


class PlatformUserNotFoundError(DevRadarError):
    """Handle does not exist on the platform."""

    def __init__(self, platform: str) -> None:
        super().__init__(
            code=f"{platform.upper()}_USER_NOT_FOUND",
            message=f"User not found on {platform}",
            status_code=404,
            details={"platform": platform},
        )
        self.platform = platform


class ValidationError(DevRadarError):
    """Input validation error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=422,
            details=details,
        )
