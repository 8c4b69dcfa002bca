# src/bptree_map/errors.py
class BPlusTreeMapError(Exception):
    """Base class for all bptree_map exceptions."""
    pass


class ConfigurationError(BPlusTreeMapError, ValueError):
    """Invalid construction parameters (e.g. an order below the minimum)."""
    pass


class EmptyTreeError(BPlusTreeMapError):
    """A search was started on a tree that has no root."""

    def __init__(self, message: str = "tree is empty"):
        super().__init__(message)


class NoSuchKeyError(BPlusTreeMapError, KeyError):
    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"Key {self.key!r} not found"


class UnsupportedOperationError(BPlusTreeMapError, NotImplementedError):
    def __init__(self, operation: str, hint: str = None):
        self.operation = operation
        self.hint = hint
        message = f"Operation '{operation}' is not supported"
        if hint:
            message += f". {hint}"
        super().__init__(message)


class InvariantViolationError(BPlusTreeMapError):
    def __init__(self, invariant: str, details: str = None):
        self.invariant = invariant
        self.details = details
        message = f"{invariant} violated"
        if details:
            message += f": {details}"
        super().__init__(message)
