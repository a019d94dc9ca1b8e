from models.variant import VariantModel


def test_batch_creates_and_updates_variants(client, create_product):
    product = create_product(variants=[{"name": "Sand", "image_src": "https://cdn/sand.jpg"}])
    existing = product["variants"][0]

    response = client.post("/api/variants/batch", json={"variants": [
        {"id": existing["id"], "name": "Dune", "image_src": "https://cdn/dune.jpg", "add": False, "product_id": product["id"]},
        {"id": "", "name": "Olive", "image_src": "https://cdn/olive.jpg", "add": True, "product_id": product["id"]},
    ]})

    assert response.status_code == 200
    body = response.json()
    assert [v["name"] for v in body["updated"]] == ["Dune"]
    assert [v["name"] for v in body["created"]] == ["Olive"]
    assert body["created"][0]["type"] == "color"
    assert body["failed"] == []

    variants = client.get(f"/api/products/{product['id']}").json()["variants"]
    assert [(v["name"], v["image_src"]) for v in variants] == [
        ("Olive", "https://cdn/olive.jpg"),
        ("Dune", "https://cdn/dune.jpg"),
    ]


def test_batch_keeps_valid_entries_when_one_fails(client, create_product, db):
    product = create_product()

    response = client.post("/api/variants/batch", json={"variants": [
        {"id": "no-such-variant", "name": "Ghost", "image_src": "https://cdn/ghost.jpg", "add": False, "product_id": product["id"]},
        {"id": "", "name": "Olive", "image_src": "https://cdn/olive.jpg", "add": True, "product_id": product["id"]},
    ]})

    assert response.status_code == 200
    body = response.json()
    assert body["failed"] == [{"index": 0, "id": "no-such-variant", "error": "NoResultFound"}]
    assert [v["name"] for v in body["created"]] == ["Olive"]
    assert [v.name for v in db.query(VariantModel).all()] == ["Olive"]


def test_batch_rejects_blank_names(client, create_product):
    product = create_product()

    response = client.post("/api/variants/batch", json={"variants": [
        {"id": "", "name": "", "image_src": "https://cdn/olive.jpg", "add": True, "product_id": product["id"]},
    ]})

    assert response.status_code == 422


def test_remove_variant(client, create_product):
    product = create_product(variants=[{"name": "Sand", "image_src": "https://cdn/sand.jpg"}])

    response = client.delete(f"/api/variants/{product['variants'][0]['id']}")

    assert response.status_code == 200
    assert client.get(f"/api/products/{product['id']}").json()["variants"] == []


def test_remove_unknown_variant_is_an_error(client):
    response = client.delete("/api/variants/no-such-variant")
    assert response.status_code == 404


def test_batch_reports_unknown_product(client, create_product, db):
    product = create_product()

    response = client.post("/api/variants/batch", json={"variants": [
        {"id": "", "name": "Ghost", "image_src": "https://cdn/ghost.jpg", "add": True, "product_id": "no-such-product"},
        {"id": "", "name": "Olive", "image_src": "https://cdn/olive.jpg", "add": True, "product_id": product["id"]},
    ]})

    assert response.status_code == 200
    body = response.json()
    assert body["failed"] == [{"index": 0, "id": "", "error": "IntegrityError"}]
    assert [v["name"] for v in body["created"]] == ["Olive"]
    assert [(v.name, v.product_id) for v in db.query(VariantModel).all()] == [("Olive", product["id"])]
