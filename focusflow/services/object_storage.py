"""Object storage for generated images, kept on local disk and served as static files."""

import asyncio
from pathlib import Path, PurePosixPath
from typing import Protocol

import structlog

from focusflow.config import settings

logger = structlog.get_logger()


class ObjectStorageError(Exception):
    """Raised when an object cannot be stored."""


class ObjectStorage(Protocol):
    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str: ...

    def get_public_url(self, bucket: str, path: str) -> str: ...


class LocalObjectStorage:
    """
    Bucket/path object store rooted in a directory.

    ``root`` is mounted by the app under ``base_url``, so the public URL of an
    object is ``<base_url>/<bucket>/<path>``.
    """

    def __init__(self, root: str | Path | None = None, base_url: str | None = None):
        self.root = Path(root or settings.MEDIA_ROOT)
        self.base_url = (base_url if base_url is not None else settings.MEDIA_URL).rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        relative = PurePosixPath(bucket) / PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ObjectStorageError(f"Invalid object path: {bucket}/{path}")
        return self.root.joinpath(*relative.parts)

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Store ``data`` and return its key. Existing objects are kept unless ``upsert``."""
        target = self._resolve(bucket, path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb" if upsert else "xb") as f:
                f.write(data)

        try:
            await asyncio.to_thread(_write)
        except FileExistsError as e:
            raise ObjectStorageError(f"Object already exists: {bucket}/{path}") from e
        except OSError as e:
            raise ObjectStorageError(f"Failed to store {bucket}/{path}: {e}") from e

        logger.info(
            "Object stored",
            bucket=bucket,
            path=path,
            size=len(data),
            content_type=content_type,
        )
        return f"{bucket}/{path}"

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/{bucket}/{path}"
