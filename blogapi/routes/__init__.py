"""
Blog API — Routes Package
===========================

Route Inventory:
    - auth.py:    POST /auth/signup, POST /auth/login
    - posts.py:   GET /posts?user_id=, GET /posts/{id},
                  POST /posts, PATCH /posts/{id}, DELETE /posts/{id}
    - health.py:  GET /health, GET /

Routes stay thin: extract input, call a store or service, pick the status
code. Failures propagate as BlogError subclasses to the handlers in main.py.
"""
