from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from scimfilter.exceptions import SCIMException
from scimfilter.utils import logger


async def scim_exception_handler(request: Request, exc: SCIMException) -> JSONResponse:
    """Render a SCIMException as a SCIM error response (RFC 7644 Section 3.12)."""
    logger.warning(f"SCIM error on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_error_response().model_dump(by_alias=True, exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SCIMException, scim_exception_handler)
