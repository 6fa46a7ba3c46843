# Services package init
"""
Postboard Backend — Services Layer
====================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - UserService: register, authenticate + issue token, resolve token, my posts
    - PostService: create, update, delete (always scoped to the calling user)

Both services are stateless; the database session and settings are passed
in on every call, so one shared instance serves all requests.
"""
