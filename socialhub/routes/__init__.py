# Routes package init
"""
SocialHub Backend - API Routes Package
========================================

Route Inventory:
    - posts.py:   /api/posts/...   (posts, likes, comments; bearer token required)
    - health.py:  GET /            (liveness banner)
                  GET /health      (database health check)

Routes stay thin: extract input, call the service, render the result.
"""
