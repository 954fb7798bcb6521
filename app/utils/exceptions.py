"""
Application exceptions for the Job Tracker AI API.

Each class carries the HTTP status it maps to. ``ExternalServiceError`` never
reaches a client in practice: the generation gateway absorbs it and falls
back to template output.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException


class JobTrackerBaseException(Exception):
    """Base exception for the Job Tracker AI API"""

    http_status = 500
    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.cause = cause
        super().__init__(message)

    @staticmethod
    def _details(base: Optional[Dict[str, Any]], **values) -> Dict[str, Any]:
        details = dict(base or {})
        details.update({k: v for k, v in values.items() if v is not None})
        return details

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.cause is not None:
            out["cause"] = str(self.cause)
        return out


class ValidationError(JobTrackerBaseException):
    """Missing or invalid request input, including rejected uploads"""

    http_status = 400
    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        details = self._details(
            kwargs.pop("details", None), field=field, invalid_value=None if value is None else str(value)
        )
        super().__init__(message, details=details, **kwargs)


class DocumentExtractionError(JobTrackerBaseException):
    """An uploaded resume could not be turned into text"""

    http_status = 400
    default_code = "EXTRACTION_ERROR"

    def __init__(self, message: str, filename: str = None, reason: str = None, **kwargs):
        details = self._details(kwargs.pop("details", None), filename=filename, reason=reason)
        super().__init__(message, details=details, **kwargs)


class ContentValidationError(JobTrackerBaseException):
    """Extracted text does not look like a resume"""

    http_status = 400
    default_code = "CONTENT_VALIDATION_ERROR"

    def __init__(self, message: str, suggestion: str = None, found_keywords: list = None, **kwargs):
        details = self._details(
            kwargs.pop("details", None),
            suggestion=suggestion,
            found_keywords=None if found_keywords is None else list(found_keywords),
        )
        super().__init__(message, details=details, **kwargs)


class ConfigurationError(JobTrackerBaseException):
    """Generation settings are invalid"""

    http_status = 400
    default_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, config_key: str = None, config_value: Any = None, **kwargs):
        details = self._details(
            kwargs.pop("details", None),
            config_key=config_key,
            config_value=None if config_value is None else str(config_value),
        )
        super().__init__(message, details=details, **kwargs)


class ExternalServiceError(JobTrackerBaseException):
    """The chat-completion endpoint failed or answered with something unusable"""

    http_status = 502
    default_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(self, message: str, service_name: str = None, status_code: int = None, **kwargs):
        details = self._details(kwargs.pop("details", None), service_name=service_name, status_code=status_code)
        super().__init__(message, details=details, **kwargs)


def map_to_http_exception(exc: JobTrackerBaseException) -> HTTPException:
    return HTTPException(
        status_code=exc.http_status,
        detail={"error": exc.to_dict(), "message": exc.message},
    )
