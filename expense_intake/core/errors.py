from typing import Iterable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
import logging

logger = logging.getLogger("expense_intake.errors")


class ExpenseError(Exception):
    """Base class for errors raised by the expense service."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ExpenseValidationError(ExpenseError):
    """Client input rejected before the store is touched."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingField(ExpenseValidationError):
    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class InvalidAmount(ExpenseValidationError):
    def __init__(self):
        super().__init__("Amount must be a positive number")


class InvalidDateFormat(ExpenseValidationError):
    def __init__(self):
        super().__init__("Date must be in YYYY-MM-DD format")


class InvalidText(ExpenseValidationError):
    def __init__(self, field: str):
        super().__init__(f"Field {field} must be a string")
        self.field = field


class MethodNotAllowed(ExpenseError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, method: str, allowed: Iterable[str]):
        super().__init__(f"Method {method} Not Allowed")
        self.method = method
        self.allowed = tuple(allowed)


def expense_error_handler(request: Request, exc: ExpenseError):  # type: ignore
    headers = None
    if isinstance(exc, MethodNotAllowed):
        headers = {"Allow": ", ".join(exc.allowed)}
    elif isinstance(exc, ExpenseValidationError):
        logger.info("expense rejected: %s", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


def http_error_handler(request: Request, exc):  # type: ignore
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        # Allow comes from the app's method table, not the first partial route match
        allowed = request.app.state.allowed_methods.get(request.url.path)
        if allowed is None:
            header = (exc.headers or {}).get("Allow", "")
            allowed = [m.strip() for m in header.split(",") if m.strip()]
        return expense_error_handler(request, MethodNotAllowed(request.method, allowed))
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Not Found",
                "detail": f"No route for {request.method} {request.url.path}",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request body",
            "detail": _jsonable_errors(exc),
        },
    )


def _jsonable_errors(exc: RequestValidationError) -> list:
    # pydantic v2 error dicts may carry the raw exception under "ctx"
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )
