from .messages import L, SemanticPointer, catalog
from .messaging import MessageBus, Renderer, bus

__all__ = ["L", "SemanticPointer", "catalog", "MessageBus", "Renderer", "bus"]
