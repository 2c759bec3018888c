from .memory import InMemoryHost

__all__ = ["InMemoryHost"]
