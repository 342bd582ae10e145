from typing import Hashable


class StoreError(Exception):
    """Raised by the built-in stores when the underlying storage fails."""

    def __init__(self, operation: str, key: Hashable, message: str):
        super().__init__(f"Failed to {operation} {key!r}: {message}")
        self.operation = operation
        self.key = key
