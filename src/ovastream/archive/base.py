"""Shared protocol for archive resolvers."""

from typing import Protocol, runtime_checkable

from ..core.model import ResourceHandle


@runtime_checkable
class Archive(Protocol):
    """Protocol for resolvers that open named entries relative to `path`."""

    path: str  # primary location, never changed after construction

    def open(self, name: str) -> ResourceHandle:
        """Return a handle for `name`; the caller must close it.
        Missing entries raise NotFoundError.
        """
        ...
