# Routes package init
"""
Inkpost Backend — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - auth.py:     POST /register, POST /login, GET /profile, POST /logout
    - posts.py:    POST /post, PUT /post, GET /post, GET /post/{id}
    - uploads.py:  GET  /uploads/{path}   (stored cover images)
    - health.py:   GET  /health

Routes stay thin: they pull data out of the request (JSON, form fields,
files, the token cookie), call a service, and shape the response.
"""
