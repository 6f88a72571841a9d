"""Abstract document store interface.

A document store reads and writes one named text resource per call. The
pipeline depends on this interface, not on a concrete backend, so the local
filesystem and a Gist are interchangeable without touching core code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseDocumentStore(ABC):
    """Pluggable read/write access to documentation files.

    Implementations must be safe to call from CI environments where no
    interactive credentials are available — all auth must happen via
    constructor arguments resolved at init time.
    """

    @abstractmethod
    def read(self, document: str) -> str | None:
        """Return the document's content, or None if it does not exist.

        Any other failure must raise; a missing document is not an error.
        """

    @abstractmethod
    def write(self, document: str, content: str) -> None:
        """Replace the document's content exactly with ``content``."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional — subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
