"""Upload bookkeeping for multi-step writes.

Uploading an asset and inserting the row that points at it are two
separate remote calls. UploadBatch remembers what was uploaded so a failed
insert can remove the orphans. Cleanup is best effort: failures are
logged and never raised.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from marketplace.domain import AssetUpload, StoredAsset
from marketplace.domain.errors import StoreError
from marketplace.stores.interfaces import AssetStorage

logger = logging.getLogger(__name__)


def discard_asset(storage: AssetStorage, path_or_url: str | None) -> bool:
    """Delete an asset by storage key or public URL, logging any failure."""
    if not path_or_url:
        return False
    path = storage.path_for_url(path_or_url) or path_or_url
    try:
        storage.delete(path)
    except Exception:
        logger.warning("Failed to delete asset %s", path, exc_info=True)
        return False
    return True


class UploadBatch:
    """Assets uploaded during one request."""

    def __init__(self, storage: AssetStorage) -> None:
        self._storage = storage
        self._uploaded: list[StoredAsset] = []

    @property
    def uploaded(self) -> list[StoredAsset]:
        return list(self._uploaded)

    def upload(self, folder: str, upload: AssetUpload, label: str) -> StoredAsset:
        """Upload one asset.

        Raises:
            StoreError: If the storage call fails. Earlier uploads in the
                batch are rolled back first.
        """
        try:
            asset = self._storage.save(folder, upload)
        except Exception as exc:
            logger.error("Upload of %s to %s failed", label, folder, exc_info=True)
            self.rollback()
            raise StoreError(f"Failed to upload {label}", str(exc)) from exc
        self._uploaded.append(asset)
        return asset

    def rollback(self) -> None:
        while self._uploaded:
            discard_asset(self._storage, self._uploaded.pop().path)

    @contextmanager
    def guard(self) -> Iterator["UploadBatch"]:
        """Roll back every upload if the wrapped block raises."""
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
