"""
Object storage for product images.

Files go to Cloudinary; the returned storage URL is rewritten onto the CDN
base URL before it is stored anywhere.
"""
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader

from config import environment

logger = logging.getLogger(__name__)


def _check_base_url(setting: str, value: Optional[str]) -> str:
    if not value:
        raise RuntimeError(f"{setting} is missing in environment variables.")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise RuntimeError(f"{setting} must be an absolute http(s) URL, got '{value}'")
    if parsed.query or parsed.fragment:
        raise RuntimeError(f"{setting} must not carry a query string or fragment")
    return value.rstrip("/")


@dataclass(frozen=True)
class CdnMapping:
    """Maps URLs under the storage base URL onto the CDN base URL."""

    storage_base_url: str
    cdn_base_url: str

    @classmethod
    def create(cls, storage_base_url: Optional[str], cdn_base_url: Optional[str]) -> "CdnMapping":
        storage = _check_base_url("STORAGE_BASE_URL", storage_base_url)
        cdn = _check_base_url("CDN_BASE_URL", cdn_base_url)
        if storage == cdn:
            raise RuntimeError("STORAGE_BASE_URL and CDN_BASE_URL must differ")
        return cls(storage_base_url=storage, cdn_base_url=cdn)

    @classmethod
    def from_env(cls) -> "CdnMapping":
        return cls.create(environment.storage_base_url, environment.cdn_base_url)

    def rewrite(self, url: str) -> str:
        if url == self.storage_base_url or url.startswith(self.storage_base_url + "/"):
            return self.cdn_base_url + url[len(self.storage_base_url):]
        logger.warning("Uploaded URL %s is not under the storage base URL, leaving it as is", url)
        return url


class StorageUploader:
    """Uploads one file at a time and returns its CDN URL."""

    def __init__(self, cdn: CdnMapping, folder: Optional[str] = None):
        self.cdn = cdn
        self.folder = folder or environment.cloudinary_folder

    def upload(self, file: BinaryIO, filename: Optional[str] = None) -> str:
        logger.info("Uploading %s to object storage", filename or "file")
        result = cloudinary.uploader.upload(
            file,
            folder=self.folder,
            resource_type="image",
            transformation=[
                {"width": 1600, "height": 1600, "crop": "limit"},
                {"quality": "auto:good"}
            ]
        )
        storage_url = result.get("secure_url")
        if not storage_url:
            raise RuntimeError(f"Object storage returned no URL for {filename or 'file'}")
        return self.cdn.rewrite(storage_url)


_uploader: Optional[StorageUploader] = None


def configure_storage() -> StorageUploader:
    """Configure Cloudinary and validate the CDN mapping. Called at startup."""
    global _uploader

    cloudinary.config(
        cloud_name=environment.cloudinary_cloud_name,
        api_key=environment.cloudinary_api_key,
        api_secret=environment.cloudinary_api_secret,
        secure=True
    )
    cdn = CdnMapping.from_env()
    logger.info("Serving uploads from %s instead of %s", cdn.cdn_base_url, cdn.storage_base_url)
    _uploader = StorageUploader(cdn)
    return _uploader


def get_uploader() -> StorageUploader:
    if _uploader is None:
        return configure_storage()
    return _uploader
