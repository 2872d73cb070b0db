"""Uploaded image storage used for cleanup when a submission is rejected."""

import logging
from pathlib import Path
from typing import Protocol

from ttreviews.errors.exceptions import AssetCleanupError

logger = logging.getLogger(__name__)


class AssetStore(Protocol):
    async def delete(self, key: str) -> None: ...


class LocalAssetStore:
    """Images stored as files under a root directory, addressed by key.

    Keys look like ``equipment/<submission_id>/<timestamp>.<ext>``.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root):
            raise AssetCleanupError(key, "key escapes asset root")
        return path

    async def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise AssetCleanupError(key, str(exc)) from exc
        logger.info("Deleted asset %s", key)
