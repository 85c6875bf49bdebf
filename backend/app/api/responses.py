"""Helpers for turning timed results into HTTP responses."""

import logging

from fastapi.responses import JSONResponse

from app.services.error_classifier import ErrorCategory, classify_exception
from app.services.timing import TimedResult


def failure_response(result: TimedResult, logger: logging.Logger, operation: str) -> JSONResponse:
    """
    Classified error response for a failed operation.

    Carries the time spent before the failure. Unexpected failures are
    logged with their traceback; user-fixable ones only as a warning.
    """
    classified = classify_exception(result.error)
    if classified.category == ErrorCategory.FAILURE:
        logger.error(f"{operation} failed after {result.elapsed_ms}ms", exc_info=result.error)
    else:
        logger.warning(
            f"{operation} failed after {result.elapsed_ms}ms: {classified.category.value} ({classified.code})"
        )
    return JSONResponse(
        status_code=classified.status_code,
        content={
            "success": False,
            "elapsed_ms": result.elapsed_ms,
            "error": classified.to_dict(),
        },
    )
