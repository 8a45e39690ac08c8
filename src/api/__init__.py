"""
API Package
Contains FastAPI routes and models
"""

from api.routes import router, get_resolver
from api.models import (
    ErrorResponse,
    HealthResponse
)

__all__ = [
    'router',
    'get_resolver',
    'ErrorResponse',
    'HealthResponse'
]
