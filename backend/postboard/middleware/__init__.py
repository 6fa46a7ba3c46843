# Middleware package init
"""
Postboard Backend — Middleware Package
========================================

What:  Request interceptors applied to every request.

Interceptor chain (declared in main.MIDDLEWARE_CHAIN, outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [CORS] → Route
    Response ← [Rate Limit] ← [Request ID] ← [Logging] ← [CORS] ← Route

Any interceptor may answer the request itself (rate limit → 429, CORS →
preflight); the interceptors after it and the route then never run.
"""
