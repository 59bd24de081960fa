# Middleware package init
"""
Playlist API: Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error response
    carry the correlation id. Responses travel the chain in reverse.
"""
