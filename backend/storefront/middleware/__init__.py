# Middleware package init
"""
Storefront Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set before the logging middleware reads it, so every
    access-log line carries the ID that is also returned in X-Request-ID.
"""
