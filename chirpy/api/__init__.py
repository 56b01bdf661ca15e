# Chirpy API
from chirpy.api.router import api_router

__all__ = ["api_router"]
