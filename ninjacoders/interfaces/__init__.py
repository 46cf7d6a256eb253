"""
Interface layer package.

FastAPI routers, request schemas, and session helpers.
Routers delegate to use cases and hold no business logic.
"""
