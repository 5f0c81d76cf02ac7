"""
Internal API authentication dependency.

The analysis endpoints are internal: only the workout-generation backend
and the wizard's server side should call them.

How it works:
  - Caller sends header: X-Internal-Secret: <INTERNAL_API_SECRET>
  - Service checks it matches the configured secret
  - Returns 403 if missing or wrong, 503 if no secret is configured
"""
from fastapi import Header, HTTPException
from typing import Annotated

from app.core.config import settings


def verify_internal_secret(x_internal_secret: Annotated[str, Header()] = "") -> None:
    """FastAPI dependency: validates the shared internal secret header."""
    secret = settings.INTERNAL_API_SECRET
    if not secret:
        # Block all requests when unconfigured to prevent accidental exposure
        raise HTTPException(
            status_code=503,
            detail="Service not configured (INTERNAL_API_SECRET not set)"
        )
    if x_internal_secret != secret:
        raise HTTPException(
            status_code=403,
            detail="Forbidden: invalid or missing internal secret"
        )
