# Routes package init
"""
Postboard Backend — API Routes Package
========================================

Route Inventory:
    - users.py:   POST   /api/user/          (register)
                  POST   /api/user/login     (issue session token)
                  GET    /api/user/myPosts   (caller's posts)
    - posts.py:   POST   /api/post/create
                  PUT    /api/post/update
                  DELETE /api/post/delete
    - health.py:  GET    /health             (liveness)
                  GET    /health/ready       (readiness, checks the database)

Routes stay thin: parse the request, call a service, return its result.
Failures are raised, never turned into responses here.
"""
