"""FileDocumentStore — documents as UTF-8 files under a root directory."""

from __future__ import annotations

import logging
from pathlib import Path

from prdocs_store.base import BaseDocumentStore

logger = logging.getLogger(__name__)


class FileDocumentStore(BaseDocumentStore):
    """Reads and writes documents relative to ``root`` (the checkout in CI).

    Content is written byte-for-byte as given: no newline translation and no
    trailing-newline normalization, so an unchanged check on the next run
    compares against exactly what was written.
    """

    def __init__(self, root: str = "."):
        self._root = Path(root)

    def _path(self, document: str) -> Path:
        return self._root / document

    def read(self, document: str) -> str | None:
        path = self._path(document)
        try:
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError:
            logger.debug("%s not found", path)
            return None

    def write(self, document: str, content: str) -> None:
        path = self._path(document)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.debug("Wrote %d chars to %s", len(content), path)
