from sqlalchemy.exc import OperationalError

from database import get_db
from main import app


def test_banner_is_null_until_set(client):
    response = client.get("/api/settings/banner")

    assert response.status_code == 200
    assert response.json() is None


def test_set_banner_text_upserts(client):
    client.put("/api/settings", json={"name": "banner", "value": "Free shipping this week"})
    client.put("/api/settings", json={"name": "banner", "value": "Raya sale: 20% off"})

    response = client.get("/api/settings/banner")

    assert response.json() == {"name": "banner", "value": "Raya sale: 20% off"}


def test_other_settings_do_not_touch_the_banner(client):
    client.put("/api/settings", json={"name": "footer", "value": "Hello"})

    assert client.get("/api/settings/banner").json() is None


class BrokenSession:
    def query(self, *args, **kwargs):
        raise OperationalError("SELECT * FROM settings", {}, Exception("database is locked"))


def test_banner_read_failure_returns_null(client):
    def broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_db

    response = client.get("/api/settings/banner")

    assert response.status_code == 200
    assert response.json() is None
