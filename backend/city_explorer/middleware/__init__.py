# Middleware package init
"""
City Explorer Backend — Middleware Package
============================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set first so the access log line and every service
    log line for the same request share it.
"""
