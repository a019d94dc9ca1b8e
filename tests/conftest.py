import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BASE_URL"] = "https://shop-media.s3.ap-southeast-1.amazonaws.com"
os.environ["CDN_BASE_URL"] = "https://d1cdn.cloudfront.net"

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine
from main import app
from models import Base
from services.storage import CdnMapping, get_uploader

STORAGE_BASE_URL = os.environ["STORAGE_BASE_URL"]
CDN_BASE_URL = os.environ["CDN_BASE_URL"]


class FakeUploader:
    """Stands in for Cloudinary: answers with storage URLs rewritten to the CDN."""

    def __init__(self, cdn):
        self.cdn = cdn
        self.uploaded = []
        self.fail_on = None

    def upload(self, file, filename=None):
        if self.fail_on is not None and filename == self.fail_on:
            raise RuntimeError("storage unavailable")
        self.uploaded.append(filename)
        return self.cdn.rewrite(f"{STORAGE_BASE_URL}/products/{filename}")


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def uploader():
    return FakeUploader(CdnMapping.create(STORAGE_BASE_URL, CDN_BASE_URL))


@pytest.fixture
def client(uploader):
    app.dependency_overrides[get_uploader] = lambda: uploader
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client):
    def _create(name="Linen Tote", images=None, variants=None, price="49.90", weight="0.4"):
        payload = {
            "name": name,
            "price": price,
            "weight": weight,
            "description": "<p>Hand-stitched linen tote.</p>",
            "images": images if images is not None else [{"src": f"{CDN_BASE_URL}/products/{name}.jpg"}],
            "variants": variants or [],
        }
        response = client.post("/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_category(client):
    def _create(name):
        response = client.post("/api/categories", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()
    return _create
