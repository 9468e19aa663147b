"""Error types for the edit-planning backend and their mapping to API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from google.genai import errors as genai_errors
from starlette.exceptions import HTTPException as StarletteHTTPException

from editplan.models.common import GENERIC_INVALID_REQUEST, REQUEST_FIELD_ERRORS
from editplan.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"
METHOD_NOT_ALLOWED_MESSAGE = "method not allowed"


@dataclass(eq=False)
class EditPlanError(Exception):
    """
    Base error for everything the planner and editor services raise.
    ``message`` is meant for logs; only InvalidInputError shows it to callers.
    """

    message: str
    status_code: int = 500
    error_type: str = "internal_error"
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message}"


class ConfigurationError(EditPlanError):
    """A required environment value is missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_type="configuration_error",
            details=details,
        )


class InvalidInputError(EditPlanError):
    """Caller supplied a payload the services cannot work with."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_type="invalid_input",
            details=details,
        )


class ModelCallError(EditPlanError):
    """
    Transport or provider failure while calling Gemini.
    ``error_type`` carries the provider category (rate_limit, timeout, ...).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown_error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_type=error_type,
            details=details,
        )


class ModelOutputParseError(EditPlanError):
    """Model text could not be parsed as JSON."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_type="parse_error",
            details=details,
        )


class InvalidModelOutputError(EditPlanError):
    """Model JSON parsed but does not match the instruction schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_type="invalid_output",
            details=details,
        )


class EmptyModelResponseError(EditPlanError):
    """Model returned no text at all."""

    def __init__(self, message: str = "No response from Gemini") -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_type="empty_response",
        )


def validation_message(errors: Sequence[Dict[str, Any]]) -> str:
    """Pick the caller-facing message for the first failing body field."""
    for err in errors:
        loc = err.get("loc") or ()
        if len(loc) > 1 and loc[0] == "body" and loc[1] in REQUEST_FIELD_ERRORS:
            return REQUEST_FIELD_ERRORS[loc[1]]
    return GENERIC_INVALID_REQUEST


class MapExceptions:
    """Translate SDK failures into ModelCallError and install FastAPI handlers.

    Keeps provider-specific classification in one place so services only
    ever raise EditPlanError subclasses.
    """

    def map_gemini_exception(self, exc: Exception) -> ModelCallError:
        """
        Map a google-genai / httpx exception to a ModelCallError.
        The category is kept for logs; the HTTP layer always answers 500.
        """
        logger.error("Gemini error during model call", exc_info=exc)

        if isinstance(exc, genai_errors.APIError):
            code = getattr(exc, "code", None)
            details = {
                "upstream_status": code,
                "upstream_reason": getattr(exc, "status", None),
            }
            if code == 429:
                return ModelCallError(
                    message="Gemini usage limits reached.",
                    error_type="rate_limit",
                    details=details,
                )
            if code in (408, 504):
                return ModelCallError(
                    message="Gemini timed out while handling the request.",
                    error_type="timeout",
                    details=details,
                )
            if code == 400:
                return ModelCallError(
                    message="Invalid request sent to Gemini.",
                    error_type="bad_request",
                    details=details,
                )
            if code in (401, 403):
                return ModelCallError(
                    message="Access denied when calling Gemini. Check the API key.",
                    error_type="permission_denied",
                    details=details,
                )
            if isinstance(exc, genai_errors.ClientError):
                return ModelCallError(
                    message=f"Gemini rejected the request: {getattr(exc, 'message', exc)}",
                    error_type="client_error",
                    details=details,
                )
            return ModelCallError(
                message="Gemini encountered an internal error.",
                error_type="api_error",
                details=details,
            )

        if isinstance(exc, httpx.TimeoutException):
            return ModelCallError(
                message="Timed out waiting for Gemini.",
                error_type="timeout",
            )
        if isinstance(exc, httpx.TransportError):
            return ModelCallError(
                message="Could not connect to Gemini. Check network or service status.",
                error_type="connection_error",
            )

        return ModelCallError(
            message=f"Unexpected error while calling Gemini: {exc}",
            error_type="unknown_error",
            details={"exception_type": exc.__class__.__name__},
        )

    @staticmethod
    def register_exception_handlers(app: FastAPI) -> None:
        """
        Install the {"error": ...} response shapes on the app. Call once:

            app = FastAPI()
            MapExceptions.register_exception_handlers(app)
        """

        @app.exception_handler(StarletteHTTPException)
        async def http_error_handler(
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
                message = METHOD_NOT_ALLOWED_MESSAGE
            else:
                message = exc.detail
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": message},
                headers=getattr(exc, "headers", None),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_error_handler(
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            message = validation_message(exc.errors())
            logger.info(f"Rejected {request.url.path}: {message}")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": message},
            )

        @app.exception_handler(InvalidInputError)
        async def invalid_input_handler(
            request: Request, exc: InvalidInputError
        ) -> JSONResponse:
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.message},
            )

        @app.exception_handler(EditPlanError)
        async def edit_plan_error_handler(
            request: Request, exc: EditPlanError
        ) -> JSONResponse:
            logger.error(
                f"Unhandled {exc.__class__.__name__} on {request.url.path}: {exc}",
                extra={"error_type": exc.error_type, "details": exc.details},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": INTERNAL_ERROR_MESSAGE},
            )
