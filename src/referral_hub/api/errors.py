"""Exception handlers that keep every error in the API's JSON envelope."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from referral_hub.logging_config import get_logger

logger = get_logger(__name__)

SERVER_ERROR_MESSAGE = "Something went wrong on the server."


def _field_name(loc: tuple) -> str:
    # ("body", "yourEmail") -> "yourEmail"; ("body",) and ("body", 17) -> "body"
    if len(loc) > 1 and isinstance(loc[1], int):
        return "body"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts) or "body"


def register_exception_handlers(app: FastAPI, expose_errors: bool) -> None:
    """Install handlers for malformed requests and unhandled faults.

    Args:
        app: Application to configure
        expose_errors: Include exception text in 500 responses (development only)
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "Invalid value")}
            for err in exc.errors()
        ]
        logger.info("request_rejected", path=request.url.path, errors=len(errors))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, error=str(exc))
        content = {"success": False, "message": SERVER_ERROR_MESSAGE}
        if expose_errors:
            content["error"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
