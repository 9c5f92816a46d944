"""
Blog API — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID first so every log line for the request can carry it
    - Logging measures duration and logs the final status code
"""
