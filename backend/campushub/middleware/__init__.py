"""
CampusHub Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Rate Limit] → [Upload Limit]
            → [GZip] → [CORS] → Route

    1. Request ID first so every later log line and error body carries it
    2. Logging records status and duration, including rate-limited requests
    3. Rate Limit only guards the credential endpoints (login, signup)
    4. Upload Limit rejects oversized /clublisting bodies before form parsing
"""
