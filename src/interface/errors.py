class InterfaceError(Exception):
    """Raised when a presentation interface cannot be started."""
