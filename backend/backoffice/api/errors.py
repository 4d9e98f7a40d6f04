"""
HTTP mapping for workflow service errors.

    ApplicationNotFound → 404
    StaleStatusError    → 409
    TransitionDenied    → 403 (admin rank / ownership) or 422 (target, documents, comment)

Denials carry the engine's message plus a machine-readable reason code so
the portals can prompt the right remedy.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backoffice.services.status_service import (
    ApplicationNotFound,
    StaleStatusError,
    TransitionDenied,
)
from backoffice.workflow import AUTHORIZATION_FAILURES


async def _not_found(request: Request, exc: ApplicationNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _stale(request: Request, exc: StaleStatusError) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={
            "detail": "Application status has changed; reload and try again",
            "expected_status": exc.expected,
            "current_status": exc.actual,
        },
    )


async def _denied(request: Request, exc: TransitionDenied) -> JSONResponse:
    result = exc.result
    status_code = 403 if result.reason in AUTHORIZATION_FAILURES else 422
    return JSONResponse(
        status_code=status_code,
        content={"detail": result.error, "reason": result.reason.value},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationNotFound, _not_found)
    app.add_exception_handler(StaleStatusError, _stale)
    app.add_exception_handler(TransitionDenied, _denied)
