"""
Jotter Backend: Middleware Package
===================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Method Override] → [CORS] → Route

    1. Request ID: correlation ID for every later log line
    2. Logging: one access line with status and duration
    3. Method Override: POST ?_method=PUT is routed as PUT
    4. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
