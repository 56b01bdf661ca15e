"""Chirpy API Router - aggregates all API routes."""

from fastapi import APIRouter

from chirpy.api import auth, chirps, health, metrics, users, webhooks

# Main API router - all routes will be prefixed with /api
api_router = APIRouter(prefix="/api")

# Include routers
api_router.include_router(health.router)
api_router.include_router(metrics.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(chirps.router)
api_router.include_router(webhooks.router)
