"""
Top‑level API router.

Aggregates the domain‑specific routers under a unified prefix.  When
new domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
