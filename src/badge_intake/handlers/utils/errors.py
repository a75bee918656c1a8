"""
Error types and error-to-response mapping for the order-intake handlers.

Handlers raise the exceptions defined here; the ``handle_service_errors``
decorator converts them into the JSON error bodies the storefront expects:
``{"error": "<summary>", "details": "<message>"}``.
"""

import functools
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools.event_handler import Response
from pydantic import ValidationError as PydanticValidationError

from badge_intake.handlers.utils.observability import count, logger, tracer
from badge_intake.handlers.utils.responses import json_response


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    CONFIGURATION = "CONFIGURATION"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity,
        category: ErrorCategory,
        summary: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.summary = summary
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class ValidationError(BaseServiceError):
    """Raised when the caller supplied incomplete input."""

    status_code = 400

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            summary=message,
        )
        self.details = details


class ConfigurationError(BaseServiceError):
    """Raised when the function is deployed without required credentials."""

    def __init__(self, message: str, details: str):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            summary=message,
        )
        self.details = details


class ProviderError(BaseServiceError):
    """Raised when a call to Square, Cloudinary or Resend fails."""

    def __init__(self, message: str, provider: str):
        super().__init__(
            message=message,
            error_code="PROVIDER_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
        )
        self.provider = provider


def format_error_response(error: BaseServiceError, failure_summary: str) -> Dict[str, Any]:
    """Format error for API response."""
    if isinstance(error, ValidationError):
        body: Dict[str, Any] = {"error": error.summary}
        if error.details:
            body["details"] = error.details
        return body

    if isinstance(error, ConfigurationError):
        return {"error": error.summary, "details": error.details}

    return {"error": error.summary or failure_summary, "details": error.message}


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    count("ErrorCount")
    count(f"Error{error.category.value.title().replace('_', '')}Count")

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.warning if error.severity == ErrorSeverity.LOW else logger.error
    log(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
            "provider": getattr(error, "provider", None),
        },
    )


def handle_service_errors(failure_summary: str, allow_methods: str) -> Callable:
    """
    Decorator converting exceptions raised by a route into JSON responses.

    Args:
        failure_summary: ``error`` text used for provider and unexpected failures
        allow_methods: value for the Access-Control-Allow-Methods header

    Returns:
        Decorator for a Powertools route function
    """

    def decorator(func: Callable[..., Response]) -> Callable[..., Response]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Response:
            try:
                return func(*args, **kwargs)
            except BaseServiceError as e:
                log_error_metrics(e)
                return json_response(
                    status_code=e.status_code,
                    body=format_error_response(e, failure_summary),
                    allow_methods=allow_methods,
                )
            except PydanticValidationError as e:
                logger.warning("Request validation failed", extra={
                    "validation_errors": str(e),
                    "error_count": e.error_count(),
                })
                count("ValidationError")

                missing = [
                    str(error["loc"][-1]) for error in e.errors() if error.get("loc")
                ]
                validation_error = ValidationError(
                    message="Missing required fields",
                    details=", ".join(missing) or None,
                )
                return json_response(
                    status_code=400,
                    body=format_error_response(validation_error, failure_summary),
                    allow_methods=allow_methods,
                )
            except Exception as e:
                logger.exception("Unexpected error in handler", extra={
                    "error": str(e),
                    "function_name": func.__name__,
                })
                count("UnexpectedError")
                return json_response(
                    status_code=500,
                    body={"error": failure_summary, "details": str(e)},
                    allow_methods=allow_methods,
                )

        return wrapper

    return decorator
