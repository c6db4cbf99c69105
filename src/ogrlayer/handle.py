# src/ogrlayer/handle.py

"""
This module defines the owned-resource primitive every engine object wrapper builds on.

An OwnedHandle holds exactly one engine object and is its only owner:
- close() releases the object (the engine destructor runs when the last
  reference to the binding proxy is dropped, which the wrapper guarantees by
  never sharing it)
- take() hands the object over to a callee that will own it from now on; the
  wrapper becomes consumed and any later access raises ConsumedHandleError
"""

import logging
from typing import Any

from .errors import ConsumedHandleError

log = logging.getLogger(__name__)

__all__ = [
    "OwnedHandle"
]

class OwnedHandle:
    """
    Single-owner wrapper around an opaque engine object.

    Args:
        handle: The engine object (a GDAL binding proxy). Must not be None.
    """
    def __init__(self, handle: Any):
        if handle is None:
            raise ValueError(f"{type(self).__name__} cannot wrap a NULL handle")
        self._handle = handle
        self._transferred = False

    @property
    def handle(self) -> Any:
        """The wrapped engine object, borrowed for the duration of a call."""
        if self._handle is None:
            state = "transferred" if self._transferred else "released"
            raise ConsumedHandleError(f"{type(self).__name__} handle was already {state}")
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle is None

    @property
    def transferred(self) -> bool:
        """True once ownership was handed to the engine through take()."""
        return self._transferred

    def take(self) -> Any:
        """
        Relinquishes ownership of the engine object.

        Used only at ownership transfer points. After this call the wrapper
        will neither release nor expose the object again.

        Returns:
            The engine object, now owned by the caller.
        """
        handle = self.handle
        self._handle = None
        self._transferred = True
        return handle

    def close(self) -> None:
        """Releases the engine object. Calling it again is a no-op."""
        # Dropping the only reference runs the binding's destructor
        self._handle = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
