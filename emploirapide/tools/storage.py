"""
File storage for profile photos, company logos and CVs.

Cloudinary is used when its credentials are configured, otherwise files are
written under the local upload directory and served by the app.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import cloudinary.exceptions
import cloudinary.uploader

from emploirapide.config import Settings
from emploirapide.errors import UploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Where an uploaded file lives: its public URL and the provider key."""

    url: str
    key: str


class FileStorage:
    """Storage interface."""

    def upload(
        self,
        content: bytes,
        folder: str,
        public_id: str,
        resource_type: str = "image",
        extension: str = "bin",
    ) -> StoredFile:
        raise NotImplementedError

    def delete(self, key: str, resource_type: str = "image") -> None:
        raise NotImplementedError


class LocalFileStorage(FileStorage):
    """Local filesystem storage served under /uploads."""

    def __init__(self, base_path: str, public_base_url: str):
        self.base_path = Path(base_path)
        self.public_base_url = public_base_url.rstrip("/")

    def upload(self, content, folder, public_id, resource_type="image", extension="bin"):
        key = f"{folder}/{public_id}.{extension}"
        path = self.base_path / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Error saving file {path}: {e}")
            raise UploadError() from e
        logger.info(f"File saved successfully: {path}")
        return StoredFile(url=f"{self.public_base_url}/uploads/{key}", key=key)

    def delete(self, key, resource_type="image"):
        path = self.base_path / key
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise UploadError("Erreur lors de la suppression du fichier") from e


class CloudinaryStorage(FileStorage):
    """Cloudinary storage through the official SDK."""

    def __init__(self, settings: Settings):
        self.options = {
            "cloud_name": settings.cloudinary_cloud_name,
            "api_key": settings.cloudinary_api_key,
            "api_secret": settings.cloudinary_api_secret,
            "timeout": settings.search_timeout,
        }

    def upload(self, content, folder, public_id, resource_type="image", extension="bin"):
        if resource_type == "raw":
            # Raw assets keep their extension in the public id
            public_id = f"{public_id}.{extension}"
        try:
            result = cloudinary.uploader.upload(
                BytesIO(content),
                folder=folder,
                public_id=public_id,
                resource_type=resource_type,
                overwrite=True,
                **self.options,
            )
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload failed for {folder}/{public_id}: {e}")
            raise UploadError() from e
        return StoredFile(url=result["secure_url"], key=result["public_id"])

    def delete(self, key, resource_type="image"):
        try:
            cloudinary.uploader.destroy(key, resource_type=resource_type, **self.options)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary destroy failed for {key}: {e}")
            raise UploadError("Erreur lors de la suppression du fichier") from e


def get_storage_for(settings: Settings) -> FileStorage:
    if settings.cloudinary_enabled:
        return CloudinaryStorage(settings)
    return LocalFileStorage(settings.upload_dir, settings.public_base_url)
