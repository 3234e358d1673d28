"""
Jotter Backend: HTTP Method Override Middleware
================================================

What:  Lets HTML forms reach PUT/PATCH/DELETE routes.
How:   A POST request carrying `?_method=PUT` (case-insensitive) is routed
       as PUT. Only POST is ever rewritten and only to the allowed methods;
       any other `_method` value is ignored.

Example:
    <form method="post" action="/notes/<id>?_method=PUT">
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

OVERRIDE_PARAM = "_method"
ALLOWED_OVERRIDES = {"PUT", "PATCH", "DELETE"}


class MethodOverrideMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "POST":
            override = request.query_params.get(OVERRIDE_PARAM, "").upper()
            if override in ALLOWED_OVERRIDES:
                logger.debug("Method override: POST -> %s %s", override, request.url.path)
                request.scope["method"] = override
        return await call_next(request)
