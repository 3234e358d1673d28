"""
Jotter Backend: Error Responder
================================

What:  The single place where an AppError becomes an HTTP response.
Who:   Route handlers (for Result errors) and the fallback exception handler
       in jotter.main (for anything unexpected).

Response shapes:
    RATE_LIMITED  -> 429 JSON {"error": message} with a Retry-After header
    anything else -> status from the error kind, plain-text body = message

The error's context is written to the log and never to the response.
"""

import logging

from starlette.responses import JSONResponse, PlainTextResponse, Response

from jotter.errors import AppError, ErrorKind
from jotter.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def error_response(error: AppError) -> Response:
    rid = request_id_var.get("")

    if error.kind is ErrorKind.INTERNAL:
        logger.error("[%s] Internal error | Context: %s", rid, error.context)
    else:
        logger.warning("[%s] %s: %s", rid, error.kind.value, error.message)

    if error.kind is ErrorKind.RATE_LIMITED:
        retry_after = error.context.get("retry_after")
        headers = {"Retry-After": str(retry_after)} if retry_after else None
        return JSONResponse(
            status_code=error.status,
            content={"error": error.message},
            headers=headers,
        )

    return PlainTextResponse(error.message, status_code=error.status)
