"""
Boutique Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to requests.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID: correlation ID for logs and error bodies
    - Logging: method, path, status and duration of every request
    - CORS: FastAPI's CORSMiddleware with the configured policy

Access control (token verification, role checks) lives in
access_control.py and is attached to individual routes as dependencies.
"""
