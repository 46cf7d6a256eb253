"""
NinjaCoders: marketing site and shop for the NinjaCoders masterclasses.

Application package root. A small modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - storefront: Catalogue, session cart and checkout, newsletter, photo contest.

Layers:
    - domain: Entities, ports (ABCs), errors, validation rules.
    - application: Use cases and DTOs.
    - infrastructure: Adapters (SQL store, SMTP, Jinja2, filesystem).
    - interfaces: FastAPI routers (HTML pages and JSON API), schemas, session helpers.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
