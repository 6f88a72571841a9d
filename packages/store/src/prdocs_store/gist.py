"""GistDocumentStore — keep the documentation file in a GitHub Gist.

Useful when the workflow token cannot push to the repository, or when a team
wants one agent-instructions file shared across several repositories. Each
document maps to a file of the same basename inside the Gist.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

from prdocs_store.base import BaseDocumentStore

logger = logging.getLogger(__name__)


class GistDocumentStore(BaseDocumentStore):
    """Reads and writes documents as files in a single GitHub Gist.

    The Gist ID is stored in .prdocs.yml under `gist_id`. Running
    `prdocs init` with the gist store creates the Gist and writes the ID to
    .prdocs.yml automatically.
    """

    def __init__(self, gist_id: str, token: str):
        try:
            from github import Github
        except ImportError:
            raise ImportError("PyGithub is required for GistDocumentStore. Install prdocs.")
        self._gist_id = gist_id
        self._gh = Github(token)

    @staticmethod
    def _filename(document: str) -> str:
        # Gist files are flat; "docs/AGENTS.md" is stored as "AGENTS.md".
        return PurePosixPath(document).name

    def _get_gist(self):
        return self._gh.get_gist(self._gist_id)

    def read(self, document: str) -> str | None:
        file_obj = self._get_gist().files.get(self._filename(document))
        if file_obj is None:
            return None
        return file_obj.content or ""

    def write(self, document: str, content: str) -> None:
        from github import InputFileContent

        filename = self._filename(document)
        self._get_gist().edit(files={filename: InputFileContent(content)})
        logger.debug("Updated %s in gist %s", filename, self._gist_id)

    def close(self) -> None:
        self._gh.close()
