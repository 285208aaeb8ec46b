from .pointer import L, SemanticPointer
from .catalog import MessageCatalog, catalog, flatten_messages

__all__ = ["L", "SemanticPointer", "MessageCatalog", "catalog", "flatten_messages"]
