"""HTTP handlers and service assembly."""

from .chat import router as chat_router
from .models import router as models_router
from .instances import AppServices, build_services

__all__ = ["AppServices", "build_services", "chat_router", "models_router"]
