"""
Pydantic schemas for the storefront JSON API.

These schemas define the API contract. Email format is checked by
the domain rule instead, so that every caller gets
the same "Email is invalid!" message.
No business logic belongs here.
"""

from typing import Literal

from pydantic import BaseModel, Field


class NewsletterSignupRequest(BaseModel):
    """Request schema for the newsletter signup endpoint.

    Attributes:
        name: Visitor's name, used in the greeting.
        email: Address the welcome email goes to.
    """

    name: str = Field(default="", max_length=100)
    email: str = Field(default="", max_length=320)


class ApiResult(BaseModel):
    """Result envelope returned by every API endpoint.

    ``error`` is only present when ``result`` is ``"error"``.
    """

    result: Literal["success", "error"]
    error: str | None = None


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: Literal["ok", "degraded"]
    version: str
    store: Literal["ok", "unavailable"]
