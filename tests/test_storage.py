import io

import cloudinary.uploader
import pytest

from config import environment
from services import storage
from services.storage import CdnMapping, StorageUploader
from tests.conftest import CDN_BASE_URL, STORAGE_BASE_URL


def test_rewrite_moves_storage_urls_onto_the_cdn():
    cdn = CdnMapping.create(STORAGE_BASE_URL + "/", CDN_BASE_URL)

    assert cdn.rewrite(f"{STORAGE_BASE_URL}/products/a.jpg") == f"{CDN_BASE_URL}/products/a.jpg"


def test_rewrite_leaves_other_hosts_alone():
    cdn = CdnMapping.create(STORAGE_BASE_URL, CDN_BASE_URL)

    assert cdn.rewrite("https://elsewhere.example.com/a.jpg") == "https://elsewhere.example.com/a.jpg"
    # same prefix, different host
    assert cdn.rewrite(STORAGE_BASE_URL + ".evil.com/a.jpg") == STORAGE_BASE_URL + ".evil.com/a.jpg"


@pytest.mark.parametrize("storage_url, cdn_url", [
    (None, CDN_BASE_URL),
    (STORAGE_BASE_URL, ""),
    ("shop-media.s3.amazonaws.com", CDN_BASE_URL),
    (STORAGE_BASE_URL, "ftp://cdn.example.com"),
    (STORAGE_BASE_URL, STORAGE_BASE_URL),
])
def test_invalid_mappings_are_rejected(storage_url, cdn_url):
    with pytest.raises(RuntimeError):
        CdnMapping.create(storage_url, cdn_url)


def test_uploader_returns_cdn_url(monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append(options)
        return {"secure_url": f"{STORAGE_BASE_URL}/shop/products/abc.jpg"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    uploader = StorageUploader(CdnMapping.create(STORAGE_BASE_URL, CDN_BASE_URL), folder="shop/products")

    url = uploader.upload(io.BytesIO(b"jpeg"), "abc.jpg")

    assert url == f"{CDN_BASE_URL}/shop/products/abc.jpg"
    assert calls[0]["folder"] == "shop/products"
    assert calls[0]["resource_type"] == "image"


def test_uploader_fails_without_url(monkeypatch):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda file, **options: {})
    uploader = StorageUploader(CdnMapping.create(STORAGE_BASE_URL, CDN_BASE_URL))

    with pytest.raises(RuntimeError):
        uploader.upload(io.BytesIO(b"jpeg"), "abc.jpg")


def test_configure_storage_requires_cdn_url(monkeypatch):
    monkeypatch.setattr(environment, "cdn_base_url", None)

    with pytest.raises(RuntimeError):
        storage.configure_storage()


def test_configure_storage_builds_uploader():
    uploader = storage.configure_storage()

    assert storage.get_uploader() is uploader
    assert uploader.cdn.cdn_base_url == CDN_BASE_URL
