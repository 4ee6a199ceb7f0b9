# Middleware package init
"""
SocialHub Backend - Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first so every log line of the request can carry it
    - Logging captures response status and duration on the way out
"""
