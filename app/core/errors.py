from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

_LOG = logging.getLogger("app.errors")


class PortfolioError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(PortfolioError):
    """Malformed client input that the service refuses to act on."""

    status_code = 400


class StorageError(PortfolioError):
    """The record store is unreachable or rejected a query or write."""

    status_code = 500


def error_envelope(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidArgument)
    async def _invalid_argument_handler(request: Request, exc: InvalidArgument):
        return error_envelope(exc.message, exc.status_code)

    @app.exception_handler(StorageError)
    async def _storage_error_handler(request: Request, exc: StorageError):
        _LOG.error("storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        return error_envelope("Server Error", exc.status_code)

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        response = error_envelope(str(exc.detail), exc.status_code)
        for key, value in (exc.headers or {}).items():
            response.headers[key] = value
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        messages = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item.get("loc", ()) if part != "body")
            messages.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
        return error_envelope("; ".join(messages) or "Invalid request", 400)
