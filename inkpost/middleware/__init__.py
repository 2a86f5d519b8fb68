# Middleware package init
"""
Inkpost Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID is added to response headers (set during request phase)
    - Logging captures response status and duration (computed at response phase)
    - CORS admits exactly one frontend origin, with cookies allowed
"""
