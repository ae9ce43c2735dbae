from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.addresses import router as addresses_router
from src.adapters.api.controllers.routes import router as plans_router
from src.adapters.api.controllers.transit import router as transit_router
from src.domain.exceptions import GeocodingError, UnknownStopError

app = FastAPI(title="Transit Guide")
app.include_router(plans_router)
app.include_router(transit_router)
app.include_router(addresses_router)


@app.exception_handler(UnknownStopError)
async def unknown_stop_handler(request: Request, exc: UnknownStopError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(GeocodingError)
async def geocoding_error_handler(
    request: Request, exc: GeocodingError
) -> JSONResponse:
    logging.getLogger("uvicorn.error").warning(
        "Geocoding failed: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so clients can display them.

    Starlette's default 500 handler may return plain text/HTML.
    """

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("TRANSIT_GUIDE_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (FileNotFoundError, RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
