"""FastAPI exception handlers producing the standard ErrorResponse envelope."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ttreviews.errors.exceptions import TTReviewsError
from ttreviews.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def build_error_response(exc: TTReviewsError, trace_id: str) -> JSONResponse:
    error_response = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            trace_id=trace_id,
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(TTReviewsError)
    async def ttreviews_error_handler(request: Request, exc: TTReviewsError):
        trace_id = getattr(request.state, "trace_id", "trc_unknown")
        if exc.status_code >= 500:
            logger.error("request_failed", extra={"path": request.url.path, "code": exc.code})
        return build_error_response(exc, trace_id)
