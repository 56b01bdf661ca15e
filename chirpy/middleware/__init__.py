"""Middleware module for Chirpy."""

from chirpy.middleware.hit_counter import HitCounter, HitCounterMiddleware

__all__ = [
    "HitCounter",
    "HitCounterMiddleware",
]
