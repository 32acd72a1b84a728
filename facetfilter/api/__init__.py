from facetfilter.api.health import router as health_router
from facetfilter.api.sessions import router as sessions_router

__all__ = [
    "health_router",
    "sessions_router",
]
