from .loop import RuntimeEngine, RuntimeHooks, RuntimeStats

__all__ = ["RuntimeEngine", "RuntimeHooks", "RuntimeStats"]
